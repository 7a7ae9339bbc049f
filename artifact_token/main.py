"""Entry point: delegates to the CLI app (one module per command)."""

from rich.traceback import install

from artifact_token.cli import run


def main() -> None:
    install(show_locals=False, max_frames=5, word_wrap=True)
    run()


if __name__ == "__main__":
    main()
