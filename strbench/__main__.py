"""Allow ``python -m strbench``."""

from strbench.cli.main import main

if __name__ == "__main__":
    main()
