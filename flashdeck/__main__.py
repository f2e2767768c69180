import argparse

from flashdeck.api.main import run
from flashdeck.core.config import settings


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(description='Serve the flashcard study screen.')
    parser.add_argument('--host', default=settings.host, help='Address to bind the server to')
    parser.add_argument('--port', type=int, default=settings.port, help='Port to bind the server to')
    parser.add_argument('--reload', action='store_true', help='Restart the server when source files change')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_arguments(argv)
    print(f"Serving flashcards on http://{args.host}:{args.port}")
    run(host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
