"""Allow ``python -m tickerprice``."""

from tickerprice.main import main

if __name__ == "__main__":
    main()
