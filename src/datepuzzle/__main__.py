"""Allow running the solver with `python -m datepuzzle`."""

from datepuzzle import main

if __name__ == "__main__":
    main()
