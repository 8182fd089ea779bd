"""Allow running slowrm as ``python -m slowrm``."""

from slowrm.cli.main import app

if __name__ == "__main__":
    app()
