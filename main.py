import sys


def main(argv: list[str]) -> int:
    """Entry point: python main.py <command> [options]."""
    from workflows.whyleloop import main as whyleloop_main

    return whyleloop_main(argv)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python main.py <restore|create|resolve|fingerprint> [options]")
        sys.exit(1)

    sys.exit(main(sys.argv[1:]))
