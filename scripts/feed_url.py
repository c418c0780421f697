import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import argparse

from sync_ical.services.feed_token import build_feed_url

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print the subscribable calendar URL of a tenant.")
    parser.add_argument("tenant_id", help="Tenant ID")
    args = parser.parse_args()

    print(build_feed_url(args.tenant_id))
