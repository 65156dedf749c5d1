"""
Parse an http:// URL and fetch it over plain HTTP/1.1.
"""

import sys

from saba import HttpClient, parse_url


def main() -> None:
    url = sys.argv[1] if len(sys.argv) > 1 else "http://example.com/index.html"
    parsed = parse_url(url)
    print("host:", parsed.host, "port:", parsed.port, "path:", parsed.path)
    r = HttpClient().fetch(url)
    print("Status:", r.status_code, r.reason)
    print(r.text[:200])


if __name__ == "__main__":
    main()
