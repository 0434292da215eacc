"""Entry point for the findabuilder MCP server."""

from findabuilder.config import get_http_host, get_http_port, get_transport
from findabuilder.server import create_server


def main() -> None:
    """Run the findabuilder MCP server over stdio or streamable HTTP."""
    server = create_server()
    if get_transport() == "http":
        server.run(transport="http", host=get_http_host(), port=get_http_port())
    else:
        server.run(transport="stdio")


if __name__ == "__main__":
    main()
