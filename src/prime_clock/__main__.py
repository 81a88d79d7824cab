"""Main entry point for the prime_clock package."""
from prime_clock.cli import cli


def main():
    """Main entry point function."""
    cli()


if __name__ == "__main__":
    main()
