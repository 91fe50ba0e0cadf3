"""Command-line entry point: generate, set, list, stats, models."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from ailoot.config import settings
from ailoot.core.logging import setup_logging
from ailoot.core.loot.enums import CLOSED_SUBTYPES, ItemType, Tier
from ailoot.core.loot.errors import RequestMalformed, StorageUnavailable
from ailoot.core.loot.models import GenerationRequest, LootItem
from ailoot.db.database import SessionLocal, init_db
from ailoot.services.ai import get_ai_provider
from ailoot.services.loot_generator import (
    DEFAULT_SET_TYPES,
    GenerationReport,
    LootGenerator,
)
from ailoot.services.loot_store import LootStore

TIER_CHOICES = [t.value for t in Tier]
TYPE_CHOICES = [t.value for t in ItemType]
SUBTYPE_CHOICES = [s.value for enum_cls in CLOSED_SUBTYPES.values() for s in enum_cls]


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ai-loot", description="AI-powered loot generator")
    sub = p.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate loot items using AI")
    gen.add_argument("-t", "--tier", choices=TIER_CHOICES, default=Tier.BRONZE.value)
    gen.add_argument("-c", "--count", type=_positive_int, default=1, help="Number of items to generate")
    gen.add_argument("--type", dest="item_type", choices=TYPE_CHOICES, default=None)
    gen.add_argument(
        "--subtype",
        default=None,
        help=f"Specific subtype (e.g. Sword, Helmet, Ring); one of {', '.join(SUBTYPE_CHOICES)} or a Rune/Artifact name",
    )
    gen.add_argument("-s", "--set", dest="set_name", default=None, help="Tag items with a set name")
    gen.add_argument("-m", "--model", default=None, help="Model to use")

    st = sub.add_parser("set", help="Generate one item per type for a named set")
    st.add_argument("set_name", help="Set name")
    st.add_argument("-t", "--tier", choices=TIER_CHOICES, default=Tier.BRONZE.value)
    st.add_argument(
        "--types",
        nargs="+",
        choices=TYPE_CHOICES,
        default=[t.value for t in DEFAULT_SET_TYPES],
        help="Item types, in order",
    )
    st.add_argument("-m", "--model", default=None, help="Model to use")

    ls = sub.add_parser("list", help="List generated loot items")
    ls.add_argument("-t", "--tier", choices=TIER_CHOICES, default=None, help="Filter by tier")
    ls.add_argument("-s", "--set", dest="set_name", default=None, help="Filter by set name")
    ls.add_argument("-l", "--limit", type=_positive_int, default=20, help="Maximum number of items to display")

    sub.add_parser("stats", help="Show database statistics")
    sub.add_parser("models", help="List available models")
    return p


def format_item(item: LootItem) -> str:
    """Plain-text item card."""
    wire = item.to_wire()
    lines = [
        f"{item.name}  [{item.tier.value} {item.sub_type} ({item.type.value})]  rarity {item.rarity}",
    ]
    if item.set_name:
        lines.append(f"  Set: {item.set_name}")
    lines.append(f"  {item.description}")
    for key, value in wire["stats"].items():
        if isinstance(value, dict):
            value = ", ".join(f"{k} {v}" for k, v in value.items())
        lines.append(f"    {key}: {value}")
    for prop in item.magical_properties:
        magnitude = f" ({prop.magnitude:g})" if prop.magnitude is not None else ""
        lines.append(f"  * {prop.name}{magnitude}: {prop.description}")
    if item.lore:
        lines.append(f"  Lore: {item.lore}")
    return "\n".join(lines)


def _print_report(report: GenerationReport) -> None:
    for item in report.generated:
        print(format_item(item))
        print()
    print(
        f"Generated {len(report.generated)} items "
        f"({report.saved} new, {report.duplicates} duplicates, {report.failed} failed)"
    )


def _require_connection(generator: LootGenerator, model: Optional[str]) -> bool:
    if generator.test_connection(model):
        return True
    name = model or generator.default_model or "default"
    print(
        f"Failed to connect to {generator.ai.name}. Make sure the service is "
        f'running and model "{name}" is available.',
        file=sys.stderr,
    )
    return False


def run(args: argparse.Namespace, generator: LootGenerator, store: LootStore) -> int:
    """Execute one parsed command. Returns the process exit code."""
    if args.command == "generate":
        request = GenerationRequest.build(
            tier=args.tier,
            count=args.count,
            item_type=args.item_type,
            sub_type=args.subtype,
            set_name=args.set_name,
            model=args.model,
        )
        if not _require_connection(generator, args.model):
            return 1
        _print_report(generator.generate_and_save(request, store))
        return 0

    if args.command == "set":
        if not _require_connection(generator, args.model):
            return 1
        report = generator.generate_set_and_save(
            args.set_name,
            Tier(args.tier),
            store,
            item_types=[ItemType(t) for t in args.types],
            model=args.model,
        )
        _print_report(report)
        return 0

    if args.command == "list":
        if args.set_name:
            items = store.list_by_set_name(args.set_name)[: args.limit]
        elif args.tier:
            items = store.list_by_tier(Tier(args.tier))[: args.limit]
        else:
            items = store.list_all(args.limit)
        if not items:
            print("No items found.")
        for item in items:
            print(f"#{item.id}  {format_item(item)}")
            print()
        return 0

    if args.command == "stats":
        stats = store.stats()
        print(f"Total items: {stats['total_items']}")
        for tier, count in stats["items_by_tier"].items():
            print(f"  {tier}: {count}")
        return 0

    if args.command == "models":
        models = generator.available_models()
        if not models:
            print(f"No models available from {generator.ai.name}.")
        for name in models:
            print(name)
        return 0

    return 2


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(settings.LOG_LEVEL)

    generator = LootGenerator(get_ai_provider(), default_model=settings.AI_MODEL)
    try:
        init_db()
        db = SessionLocal()
    except (SQLAlchemyError, OSError) as e:
        print(f"Storage unavailable: {e}", file=sys.stderr)
        return 1

    try:
        return run(args, generator, LootStore(db))
    except RequestMalformed as e:
        print(f"Invalid request: {e}", file=sys.stderr)
        return 2
    except StorageUnavailable as e:
        print(f"Storage unavailable: {e}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
