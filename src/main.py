#!/usr/bin/env python3
import argparse
import os

from server import DEFAULT_HTTP_HOST, DEFAULT_HTTP_PORT, log, start_http_server


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Horrible Server: an HTTP server that crashes, freezes or mutes on request"
    )
    parser.add_argument('--host', type=str, default=DEFAULT_HTTP_HOST,
                        help=f'Interface to listen on (default: {DEFAULT_HTTP_HOST})')
    parser.add_argument('--port', type=int, default=int(os.environ.get('PORT', DEFAULT_HTTP_PORT)),
                        help=f'TCP port to listen on (default: $PORT or {DEFAULT_HTTP_PORT})')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        start_http_server(args.host, args.port)
    except KeyboardInterrupt:
        log("Stopped.")


if __name__ == '__main__':
    main()
