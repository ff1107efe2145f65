"""Allow ``python -m rag_workshop``."""

from .cli.main import cli

if __name__ == '__main__':
    cli()
