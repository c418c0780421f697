import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import argparse
import os

from dotenv import load_dotenv

from sync_ical.network.client import fetch_feed
from sync_ical.normalizers.events import parse_feed

load_dotenv()

# === FIXTURE SAVE ===


def save_fixture(ical_text: str, filename: str) -> None:
    os.makedirs("tests/fixtures", exist_ok=True)
    path = f"tests/fixtures/{filename}"
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(ical_text)
    print(f"✅ Saved {filename} ({len(parse_feed(ical_text))} events)")


# === CLI ===

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Download an iCal feed and save it as a test fixture.")
    parser.add_argument("url", help="Feed URL (Airbnb, Booking.com, ...)")
    parser.add_argument("--name", default="feed.ics", help="Fixture file name")
    args = parser.parse_args()

    save_fixture(fetch_feed(args.url), args.name)
