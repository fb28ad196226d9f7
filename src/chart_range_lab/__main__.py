"""Module entrypoint for `python -m chart_range_lab`."""

from chart_range_lab.cli import main

if __name__ == "__main__":
    main()
