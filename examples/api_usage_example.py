#!/usr/bin/env python
"""
Example of calling the catalog scraper API and exporting the result to CSV.

Start the server first with ``catalog-scraper-api``.
"""

import argparse
import json

import httpx


def main():
    parser = argparse.ArgumentParser(description="Scrape a catalog through the HTTP API")
    parser.add_argument("url", help="Catalog URL or phone number")
    parser.add_argument("--api", default="http://localhost:3000", help="API base URL")
    parser.add_argument("--csv", default="catalog.csv", help="Where to save the CSV export")
    args = parser.parse_args()

    with httpx.Client(base_url=args.api, timeout=120) as client:
        response = client.post("/api/scrape", json={"url": args.url})
        result = response.json()
        if not result.get("success"):
            print(f"Scrape failed: {result.get('error')}")
            return

        print(json.dumps(result, indent=2, ensure_ascii=False))

        export = client.post("/api/export/csv", json={"products": result["products"]})
        export.raise_for_status()
        with open(args.csv, "wb") as f:
            f.write(export.content)
        print(f"Saved {result['totalProducts']} products to {args.csv}")


if __name__ == "__main__":
    main()
