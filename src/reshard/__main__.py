"""Allow running reshard as ``python -m reshard``."""

from .cli.main import main

if __name__ == "__main__":
    main()
