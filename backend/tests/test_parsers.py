"""
Tests for the completion text parsers.
"""

import pytest

from models.records import BivouacInfo, ItemInfo
from utils.parsers import parse_bivouac_info, parse_camp_info, parse_item_info


def bivouac_block(n: int, name: str) -> str:
    return (
        f"{n}. {name}\n"
        f"おすすめスポット: {name}の川沿い\n"
        f"特徴・注意点: {name}は夜冷えます"
    )


class TestNoNumberedLines:
    @pytest.mark.parametrize("parser", [parse_camp_info, parse_bivouac_info, parse_item_info])
    @pytest.mark.parametrize("text", ["", None, "すみません、分かりません。", "- テント: 必須\n* 寝袋: 必須"])
    def test_yields_empty(self, parser, text):
        assert parser(text) == []


class TestCampInfo:
    def test_names_from_numbered_lines(self):
        text = "おすすめは次の通りです。\n1. ふもとっぱら\n富士山が見えます\n2. 道志の森\n3. 青根キャンプ場"

        records = parse_camp_info(text)

        assert [r.name for r in records] == ["ふもとっぱら", "道志の森", "青根キャンプ場"]

    def test_capped_at_three(self):
        text = "\n".join(f"{i}. Camp {i}" for i in range(1, 6))
        assert [r.name for r in parse_camp_info(text)] == ["Camp 1", "Camp 2", "Camp 3"]

    def test_whole_line_becomes_name(self):
        records = parse_camp_info("  1. Lake Camp: lakeside sites")
        assert records[0].name == "Lake Camp: lakeside sites"


class TestItemInfo:
    def test_name_and_description(self):
        assert parse_item_info("1. Tent: keeps you dry") == [ItemInfo(name="Tent", description="keeps you dry")]

    def test_line_without_colon_dropped(self):
        records = parse_item_info("1. Tent\n2. 寝袋：夜は冷えるので必須\n3. Lantern: light: bright")

        assert records == [
            ItemInfo(name="寝袋", description="夜は冷えるので必須"),
            ItemInfo(name="Lantern", description="light: bright"),
        ]

    def test_unnumbered_colon_lines_ignored(self):
        assert parse_item_info("注意: 天気を確認\n1. Tent: dry") == [ItemInfo(name="Tent", description="dry")]

    def test_capped_at_three(self):
        text = "\n".join(f"{i}. Item{i}: d{i}" for i in range(1, 6))
        assert [r.name for r in parse_item_info(text)] == ["Item1", "Item2", "Item3"]


class TestBivouacInfo:
    def test_two_blocks_paired(self):
        text = bivouac_block(1, "A河原") + "\n" + bivouac_block(2, "B海岸")

        records = parse_bivouac_info(text)

        assert records == [
            BivouacInfo(name="A河原", spot="A河原の川沿い", description="A河原は夜冷えます"),
            BivouacInfo(name="B海岸", spot="B海岸の川沿い", description="B海岸は夜冷えます"),
        ]

    def test_capped_at_three(self):
        text = "\n".join(bivouac_block(i, f"Spot{i}") for i in range(1, 6))

        records = parse_bivouac_info(text)

        assert [r.name for r in records] == ["Spot1", "Spot2", "Spot3"]
        assert records[2].spot == "Spot3の川沿い"

    def test_missing_labels_leave_defaults(self):
        records = parse_bivouac_info("1. C高原\n特徴・注意点：許可が必要")

        assert records == [BivouacInfo(name="C高原", spot="", description="許可が必要")]

    def test_labels_before_first_record_ignored(self):
        records = parse_bivouac_info("おすすめスポット: どこか\n1. D湖畔")
        assert records == [BivouacInfo(name="D湖畔")]

    def test_empty_name_not_appended(self):
        records = parse_bivouac_info("1.\nおすすめスポット: x\n2. E浜")
        assert [r.name for r in records] == ["E浜"]
