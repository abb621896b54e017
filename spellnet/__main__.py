"""Allow ``python -m spellnet``."""

from spellnet.cli import main

if __name__ == "__main__":
    main()
