"""Entry point for running the fuel narrative as a module."""

from fuel_narrative.tkui.app import main


if __name__ == "__main__":
    main()
