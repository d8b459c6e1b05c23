"""Entry point for the art3a command."""

import sys

USAGE = """\
art3a - animated ASCII art toolkit

Install CLI extras for full functionality:
  uv pip install art3a[cli]

Without them only this is available:
  art3a view FILE.3a
"""


def main() -> None:
    """Run the typer application, or a minimal fallback without typer."""
    try:
        from art3a.cli.app import create_app
        app = create_app()
    except ImportError:
        sys.exit(_fallback_main(sys.argv[1:]))
    app()


def _fallback_main(args: list[str]) -> int:
    """Handle `view` with the library alone; returns the exit status."""
    if not args or args[0] in ("-h", "--help"):
        print(USAGE, end="")
        return 0

    if args[0] == "view" and len(args) == 2:
        import art3a
        print(art3a.load(args[1]).render())
        return 0

    print(f"Unsupported without CLI extras: {' '.join(args)}", file=sys.stderr)
    print("Install CLI extras: uv pip install art3a[cli]", file=sys.stderr)
    return 1


if __name__ == "__main__":
    main()
