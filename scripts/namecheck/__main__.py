"""Allow ``python -m namecheck``."""

from namecheck.cli import app

if __name__ == "__main__":
    app(prog_name="namecheck")
