#!/usr/bin/env python3
"""
Dicerise - a dice elimination game: roll big, upgrade your dice, reach the D100
"""

from dicerise.cli.interface import InteractiveCLI


def main():
    """Main entry point for Dicerise."""
    cli = InteractiveCLI()
    cli.run()


if __name__ == '__main__':
    main()
