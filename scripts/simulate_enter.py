"""Quote entering a live pair through an LCD node.

Deposits are given as <kind>:<id>:<amount>, e.g. native:uusd:10000000 or
token:terra1...:5000000.

Usage:
    python -m scripts.simulate_enter --lcd https://lcd.example.org \
        --pair terra1... native:uusd:10000000
"""

import argparse
import json

import structlog

from zapper.address import PrefixAddressValidator
from zapper.models.assets import Asset, AssetInfo, AssetKind
from zapper.models.messages import AssetModel, SimulateEnterRequest
from zapper.pair.lcd import LcdPairQuerier
from zapper.zap import Zapper

logger = structlog.get_logger()


def parse_deposit(raw: str) -> Asset:
    """Parse <kind>:<id>:<amount>."""
    kind, _, rest = raw.partition(":")
    asset_id, _, amount = rest.rpartition(":")
    if not asset_id or not amount.isdigit():
        raise argparse.ArgumentTypeError(f"expected <kind>:<id>:<amount>, got {raw!r}")
    try:
        info = AssetInfo(AssetKind(kind), asset_id)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"unknown asset kind {kind!r}") from err
    return Asset(info, int(amount))


def main() -> None:
    parser = argparse.ArgumentParser(description="Quote a zap against a live pair")
    parser.add_argument("--lcd", required=True, help="LCD node URL")
    parser.add_argument("--pair", required=True, help="Pair contract address")
    parser.add_argument("--prefix", default="terra", help="bech32 address prefix")
    parser.add_argument("deposits", nargs="+", type=parse_deposit, help="<kind>:<id>:<amount>")
    args = parser.parse_args()

    request = SimulateEnterRequest(
        pair=args.pair,
        deposits=[AssetModel.from_asset(deposit) for deposit in args.deposits],
    )

    with LcdPairQuerier(args.lcd) as querier:
        zapper = Zapper(querier=querier, api=PrefixAddressValidator(prefix=args.prefix))
        logger.info("querying_simulation", pair=args.pair, lcd=args.lcd)
        response = zapper.simulate_enter(request)

    print(json.dumps(response.model_dump(), indent=2))


if __name__ == "__main__":
    main()
