"""Run script for the USM Week Bot."""

from src.main import main


if __name__ == "__main__":
    main()
