"""
Unit tests for the extraction strategies and the strategy chain.
"""

import pytest

from catalog_scraper.config import ExtractionConfig, ScrollConfig
from catalog_scraper.extraction import (block_scan, image_anchored_scan,
                                        known_selector_scan, run_chain)
from catalog_scraper.extraction.evaluators import (BLOCK_SCAN, CARD_SCAN,
                                                   IMAGE_ANCESTOR_SCAN)
from catalog_scraper.extraction.strategies import (build_block_records,
                                                   build_card_records,
                                                   build_image_records,
                                                   is_candidate_block,
                                                   select_fragments)
from catalog_scraper.models import ProductRecord


@pytest.fixture
def settings():
    return ExtractionConfig()


def block(text, height=300, display="block", image_url="http://x/a.png"):
    return {"text": text, "height": height, "display": display, "imageUrl": image_url}


class TestCardRecords:
    """Tests for the known-selector scan output handling."""

    def test_fields_are_trimmed(self, settings):
        records = build_card_records(
            [
                {
                    "name": "  Shoe \n",
                    "description": "\tRed shoe ",
                    "price": " $19.99 ",
                    "imageUrl": "http://x/img.png",
                }
            ],
            settings,
        )
        assert records == [
            ProductRecord(
                name="Shoe", description="Red shoe", price="$19.99", image_url="http://x/img.png"
            )
        ]

    def test_missing_name_gets_numbered_placeholder(self, settings):
        records = build_card_records(
            [{"name": "Hat"}, {"name": "   "}, {}], settings
        )
        assert [r.name for r in records] == ["Hat", "Product 2", "Product 3"]

    def test_empty_optional_fields_are_kept(self, settings):
        records = build_card_records([{"name": "Bare"}], settings)
        assert len(records) == 1
        assert records[0].description == ""
        assert records[0].price == ""
        assert records[0].image_url == ""

    def test_description_is_truncated(self, settings):
        records = build_card_records([{"name": "Long", "description": "d" * 500}], settings)
        assert len(records[0].description) == 200


class TestFragmentSelection:
    """Tests for the ancestor walk of the image-anchored scan."""

    def test_first_level_with_two_fragments_wins(self, settings):
        levels = [["only one"], ["Name", "Nice", "$5"], ["Other", "Level"]]
        assert select_fragments(levels, settings) == ["Name", "Nice", "$5"]

    def test_empty_and_long_texts_are_ignored(self, settings):
        levels = [["  ", "x" * 500, "Name"], ["Name", "", "$5"]]
        assert select_fragments(levels, settings) == ["Name", "$5"]

    def test_repeated_texts_count_once(self, settings):
        levels = [["Name", "Name"], ["Name", "$5"]]
        assert select_fragments(levels, settings) == ["Name", "$5"]

    def test_walk_stops_after_max_levels(self, settings):
        levels = [["a"]] * 5 + [["Name", "$5"]]
        assert select_fragments(levels, settings) is None

    def test_max_levels_is_configurable(self):
        levels = [["a"]] * 5 + [["Name", "$5"]]
        assert select_fragments(levels, ExtractionConfig(max_ancestor_levels=6)) == [
            "Name",
            "$5",
        ]


class TestImageRecords:
    """Tests for records built around prominent images."""

    def test_name_description_price_mapping(self, settings):
        records = build_image_records(
            [
                {
                    "imageUrl": "http://x/1.png",
                    "levels": [["Lamp", "Warm light", "Brass base", "$40"]],
                }
            ],
            settings,
        )
        assert records == [
            ProductRecord(
                name="Lamp",
                description="Warm light Brass base",
                price="$40",
                image_url="http://x/1.png",
            )
        ]

    def test_two_fragments_leave_description_empty(self, settings):
        records = build_image_records(
            [{"imageUrl": "http://x/1.png", "levels": [["Lamp", "$40"]]}], settings
        )
        assert records[0].description == ""
        assert records[0].price == "$40"

    def test_image_without_enough_text_is_skipped(self, settings):
        records = build_image_records(
            [
                {"imageUrl": "http://x/1.png", "levels": [["alone"], []]},
                {"imageUrl": "http://x/2.png", "levels": [["Cup", "$3"]]},
            ],
            settings,
        )
        assert [r.image_url for r in records] == ["http://x/2.png"]

    def test_description_is_truncated(self, settings):
        middle = ["m" * 400, "n" * 400]
        records = build_image_records(
            [{"imageUrl": "", "levels": [["Name"] + middle + ["$1"]]}], settings
        )
        assert len(records[0].description) <= 200


class TestBlockRecords:
    """Tests for the brute-force block scan output handling."""

    def test_lines_and_price(self, settings):
        records = build_block_records(
            [block("Teapot\nCeramic, 1L\nNow only €12,50!")], settings
        )
        assert records == [
            ProductRecord(
                name="Teapot",
                description="Ceramic, 1L Now only €12,50!",
                price="€12,50",
                image_url="http://x/a.png",
            )
        ]

    def test_price_is_empty_without_currency_symbol(self, settings):
        records = build_block_records([block("Teapot without price")], settings)
        assert records[0].price == ""

    @pytest.mark.parametrize(
        "candidate",
        [
            block("short"),
            block("Teapot and more", display="none"),
            block("Teapot and more", height=150),
            block("Teapot and more", height=600),
            block("Teapot and more", height=100),
            block("Teapot and more", image_url=""),
            block("   ab    \n\n   "),
        ],
    )
    def test_rejected_blocks(self, settings, candidate):
        assert not is_candidate_block(candidate, settings)
        assert build_block_records([candidate], settings) == []

    def test_accepted_block(self, settings):
        assert is_candidate_block(block("Teapot and more", height=151), settings)

    def test_name_and_description_are_truncated(self, settings):
        records = build_block_records([block("N" * 150 + "\n" + "d" * 500)], settings)
        assert len(records[0].name) == 100
        assert len(records[0].description) == 200

    def test_thresholds_are_configurable(self):
        settings = ExtractionConfig(min_block_height=10, max_block_height=2000)
        assert is_candidate_block(block("Teapot and more", height=1500), settings)


@pytest.mark.asyncio
class TestStrategies:
    """Tests for the strategies against a fake page."""

    async def test_known_selector_scan_uses_first_matching_selector(self, make_page, settings):
        def cards(arg):
            if arg["selector"] == '[class*="product"]':
                return [{"name": "From product class"}]
            if arg["selector"] == 'div[role="listitem"]':
                return [{"name": "From list item"}]
            return []

        page = make_page(responses={CARD_SCAN: cards})
        records = await known_selector_scan(page, settings)

        assert [r.name for r in records] == ["From product class"]
        selectors = [arg["selector"] for _, arg in page.evaluated]
        assert selectors == settings.card_selectors[:3]

    async def test_known_selector_scan_tries_every_selector(self, make_page, settings):
        page = make_page()
        assert await known_selector_scan(page, settings) == []
        assert len(page.evaluated) == len(settings.card_selectors)

    async def test_image_anchored_scan_passes_thresholds(self, make_page, settings):
        page = make_page(
            responses={IMAGE_ANCESTOR_SCAN: [{"imageUrl": "i", "levels": [["A", "B"]]}]}
        )
        records = await image_anchored_scan(page, settings)

        assert records[0].name == "A"
        _, arg = page.evaluated[0]
        assert arg["minWidth"] == 100
        assert arg["minHeight"] == 100
        assert arg["maxLevels"] == 5

    async def test_block_scan_scrolls_first_and_deduplicates(self, make_page, settings):
        page = make_page(
            responses={
                BLOCK_SCAN: [
                    block("Teapot\nfirst copy $5"),
                    block("Teapot\nsecond copy $6"),
                    block("Teapot\nother image", image_url="http://x/b.png"),
                ]
            },
            heights=[600],
        )
        records = await block_scan(page, settings, ScrollConfig())

        assert page.scrolls == [300, 300]
        assert [(r.name, r.description) for r in records] == [
            ("Teapot", "first copy $5"),
            ("Teapot", "other image"),
        ]


@pytest.mark.asyncio
class TestChain:
    """Tests for strategy ordering."""

    async def test_first_strategy_result_stops_the_chain(self, make_page):
        page = make_page(
            responses={
                CARD_SCAN: [{"name": "Shoe"}],
                IMAGE_ANCESTOR_SCAN: [{"imageUrl": "i", "levels": [["A", "B"]]}],
            }
        )
        records = await run_chain(page)

        assert [r.name for r in records] == ["Shoe"]
        assert page.evaluator_names == [CARD_SCAN]
        assert page.scrolls == []

    async def test_second_strategy_runs_when_first_is_empty(self, make_page, settings):
        page = make_page(
            responses={IMAGE_ANCESTOR_SCAN: [{"imageUrl": "i", "levels": [["A", "B"]]}]}
        )
        records = await run_chain(page, settings=settings)

        assert [r.name for r in records] == ["A"]
        assert IMAGE_ANCESTOR_SCAN in page.evaluator_names
        assert BLOCK_SCAN not in page.evaluator_names
        assert page.scrolls == []

    async def test_last_strategy_scrolls_before_scanning(self, make_page, settings):
        page = make_page(responses={BLOCK_SCAN: [block("Teapot\nCeramic $5")]})
        records = await run_chain(page, settings=settings, scroll=ScrollConfig())

        assert [r.name for r in records] == ["Teapot"]
        assert page.evaluator_names[-1] == BLOCK_SCAN
        assert page.scrolls

    async def test_all_strategies_empty_is_an_empty_result(self, make_page, settings):
        page = make_page()
        assert await run_chain(page, settings=settings) == []

    async def test_custom_strategy_order(self, make_page, settings):
        calls = []

        async def first(page, settings, scroll=None):
            calls.append("first")
            return []

        async def second(page, settings, scroll=None):
            calls.append("second")
            return [ProductRecord(name="Custom")]

        async def never(page, settings, scroll=None):
            calls.append("never")
            return []

        records = await run_chain(make_page(), strategies=(first, second, never))
        assert calls == ["first", "second"]
        assert records[0].name == "Custom"
