"""Allow ``python -m realmgen``."""

from realmgen.cli.main import app

if __name__ == "__main__":
    app()
