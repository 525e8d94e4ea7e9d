#!/usr/bin/env python3
"""
Dry-run the mockbidder adapter against stored payloads.

Usage:
    python run_adapter.py --request bid_request.json
    python run_adapter.py --request bid_request.json --response exchange_reply.json
    python run_adapter.py --request bid_request.json --endpoint https://x.test --config deploy.yaml

Nothing is sent over the network.
"""

import argparse
import sys
from pathlib import Path


def main(argv=None):
    parser = argparse.ArgumentParser(description="Dry-run the mockbidder adapter")
    parser.add_argument("--request", required=True, help="OpenRTB bid request JSON file")
    parser.add_argument("--response", help="Exchange response body to classify")
    parser.add_argument("--config", help="Adapter YAML configuration file")
    parser.add_argument("--endpoint", help="Override the exchange base URL")
    args = parser.parse_args(argv)

    from src.mockbidder import BidderCall, HttpResponse, create_bidder_deps, load_bidder_config
    from src.mockbidder.exceptions import MockBidderError
    from src.mockbidder.json_codec import mapper

    try:
        config = load_bidder_config(args.config)
        if args.endpoint:
            config.endpoint = args.endpoint
        bidder = create_bidder_deps(config, mapper).bidder

        bid_request = mapper.decode_value(Path(args.request).read_text())
    except (MockBidderError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = bidder.make_http_requests(bid_request)
    output = {
        "requests": [
            {
                "method": r.method,
                "uri": r.uri,
                "headers": r.headers,
                "payload": r.payload,
            }
            for r in result.value
        ],
        "errors": [e.to_dict() for e in result.errors],
    }

    if args.response:
        if not result.value:
            print("Error: no outbound request to match the response against", file=sys.stderr)
            return 1
        try:
            body = Path(args.response).read_text()
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        call = BidderCall(request=result.value[0], response=HttpResponse(200, body))
        bids = bidder.make_bids(call, bid_request)
        output["bids"] = [b.to_dict() for b in bids.value]
        output["bid_errors"] = [e.to_dict() for e in bids.errors]

    print(mapper.encode_to_string(output))
    return 0


if __name__ == "__main__":
    sys.exit(main())
