"""CLI command tests (MockProvider + in-memory SQLite)."""

import random

import pytest

from ailoot.cli import _build_parser, format_item, run
from ailoot.core.loot.enums import ItemType, Tier
from ailoot.core.loot.errors import ProviderError, RequestMalformed
from ailoot.core.loot.models import GenerationRequest
from ailoot.services.ai import MockProvider
from ailoot.services.loot_generator import LootGenerator
from ailoot.services.loot_store import LootStore


def _run(argv, generator: LootGenerator, store: LootStore) -> int:
    return run(_build_parser().parse_args(argv), generator, store)


class TestGenerateCommand:
    """The connection check consumes the first scripted response."""

    def test_generate_prints_summary(self, capsys, make_response, store: LootStore):
        gen = LootGenerator(MockProvider(responses=["ok", make_response()]), rng=random.Random(1))

        code = _run(["generate", "-t", "Gold", "--type", "Weapon", "--subtype", "Sword"], gen, store)

        out = capsys.readouterr().out
        assert code == 0
        assert "Flameheart" in out
        assert "Generated 1 items (1 new, 0 duplicates, 0 failed)" in out
        assert store.count_all() == 1

    def test_generate_fails_fast_without_connection(self, capsys, store: LootStore):
        provider = MockProvider(responses=[ProviderError("refused")])
        gen = LootGenerator(provider, default_model="llama3.1")

        code = _run(["generate", "-c", "3"], gen, store)

        assert code == 1
        assert 'model "llama3.1"' in capsys.readouterr().err
        assert len(provider.prompts) == 1
        assert store.count_all() == 0

    def test_malformed_request(self, store: LootStore):
        gen = LootGenerator(MockProvider())
        with pytest.raises(RequestMalformed):
            _run(["generate", "--type", "Weapon", "--subtype", "Helmet"], gen, store)


class TestSetCommand:
    def test_set_tags_every_item(self, capsys, make_response, store: LootStore):
        gen = LootGenerator(
            MockProvider(
                responses=[
                    "ok",
                    make_response(),
                    make_response(type="Armor", subType="Boots", stats={"defense": 20}),
                ]
            ),
            rng=random.Random(2),
        )

        code = _run(["set", "Emberfall", "-t", "Gold", "--types", "Weapon", "Armor"], gen, store)

        assert code == 0
        assert [i.set_name for i in store.list_by_set_name("Emberfall")] == ["Emberfall"] * 2
        assert "Set: Emberfall" in capsys.readouterr().out


class TestListAndStats:
    def test_list_empty(self, capsys, store: LootStore):
        code = _run(["list"], LootGenerator(MockProvider()), store)
        assert code == 0
        assert "No items found." in capsys.readouterr().out

    def test_list_and_stats(self, capsys, make_response, store: LootStore):
        gen = LootGenerator(MockProvider(responses=["ok", make_response()]))
        _run(["generate", "-t", "Gold", "--type", "Weapon"], gen, store)
        capsys.readouterr()

        _run(["list", "-t", "Gold"], gen, store)
        assert "Flameheart" in capsys.readouterr().out

        _run(["stats"], gen, store)
        out = capsys.readouterr().out
        assert "Total items: 1" in out
        assert "Gold: 1" in out
        assert "Bronze: 0" in out

    @pytest.mark.parametrize("argv", [["list", "-l", "0"], ["list", "--limit", "-3"], ["generate", "-c", "0"]])
    def test_non_positive_limit_rejected(self, capsys, argv):
        with pytest.raises(SystemExit) as exc:
            _build_parser().parse_args(argv)
        assert exc.value.code == 2
        assert "must be at least 1" in capsys.readouterr().err

    def test_list_limit(self, capsys, make_response, store: LootStore):
        gen = LootGenerator(
            MockProvider(responses=["ok", make_response(name="First"), make_response(name="Second")])
        )
        _run(["generate", "-t", "Gold", "--type", "Weapon", "-c", "2"], gen, store)
        capsys.readouterr()

        _run(["list", "-l", "1"], gen, store)

        out = capsys.readouterr().out
        assert "Second" in out
        assert "First" not in out

    def test_models(self, capsys, store: LootStore):
        _run(["models"], LootGenerator(MockProvider(models=["llama3.1", "mistral"])), store)
        assert capsys.readouterr().out.split() == ["llama3.1", "mistral"]

    def test_models_unreachable(self, capsys, store: LootStore):
        _run(["models"], LootGenerator(MockProvider(available=False)), store)
        assert "No models available from mock." in capsys.readouterr().out


class TestFormatItem:
    def test_nested_stats_and_properties(self, make_response):
        gen = LootGenerator(
            MockProvider(
                responses=[
                    make_response(
                        type="Armor",
                        subType="Helmet",
                        stats={"defense": 12, "fireResistance": 6},
                    )
                ]
            )
        )
        item = gen.generate(
            GenerationRequest.build(tier=Tier.GOLD, item_type=ItemType.ARMOR, sub_type="Helmet")
        )[0]
        text = format_item(item)

        assert text.startswith("Flameheart  [Gold Helmet (Armor)]")
        assert "elementalResistance: fire 6" in text
        assert "* Ember Edge (5): Strikes ignite the target." in text
        assert "Lore: Quenched" in text
