"""
生成結果テキストのパーサー

LLM には「1. ...」形式の番号付き行で出力させている。
番号付き行をレコードの区切りとみなし、最大3件まで取り出す。
想定外のフォーマットでも例外は出さず、取れた分だけ返す。
"""

import re
from typing import List, Optional

from models.records import BivouacInfo, CampInfo, ItemInfo

MAX_RECORDS = 3

NUMBERED_LINE = re.compile(r"^\s*\d+\.\s*(.*)$")
COLON = re.compile(r"[:：]")

SPOT_LABEL = re.compile(r"おすすめスポット\s*[:：]\s*(.*)$")
DESCRIPTION_LABEL = re.compile(r"特徴・注意点\s*[:：]\s*(.*)$")


def _numbered(line: str) -> Optional[str]:
    """番号付き行なら番号を除いた本文を返す"""
    match = NUMBERED_LINE.match(line)
    if not match:
        return None
    return match.group(1).strip()


def parse_camp_info(text: Optional[str]) -> List[CampInfo]:
    records: List[CampInfo] = []
    for line in (text or "").splitlines():
        name = _numbered(line)
        if name:
            records.append(CampInfo(name=name))
        if len(records) >= MAX_RECORDS:
            break
    return records


def parse_bivouac_info(text: Optional[str]) -> List[BivouacInfo]:
    records: List[BivouacInfo] = []
    current: Optional[BivouacInfo] = None

    for line in (text or "").splitlines():
        name = _numbered(line)
        if name is not None:
            if current is not None and current.name:
                records.append(current)
            current = BivouacInfo(name=name)
            continue

        if current is None:
            continue

        spot = SPOT_LABEL.search(line)
        if spot:
            current.spot = spot.group(1).strip()
            continue

        description = DESCRIPTION_LABEL.search(line)
        if description:
            current.description = description.group(1).strip()

    if current is not None and current.name:
        records.append(current)

    return records[:MAX_RECORDS]


def parse_item_info(text: Optional[str]) -> List[ItemInfo]:
    records: List[ItemInfo] = []
    for line in (text or "").splitlines():
        body = _numbered(line)
        if not body:
            continue
        parts = COLON.split(body, maxsplit=1)
        if len(parts) < 2:
            # コロンのない行は捨てる
            continue
        name = parts[0].strip()
        if not name:
            continue
        records.append(ItemInfo(name=name, description=parts[1].strip()))
        if len(records) >= MAX_RECORDS:
            break
    return records
