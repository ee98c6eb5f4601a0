from .cli import app


def main() -> None:
    app(prog_name="rfcmx")


if __name__ == "__main__":
    main()
