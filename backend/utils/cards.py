"""
Flex メッセージ (カルーセル) 組み立て

テンプレートJSONはバブルのリスト。レコードの件数とバブル数の小さい方だけ
固定パスのテキストを書き換え、残りのバブルはプレースホルダーのまま残す。
"""

import copy
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from models.records import BivouacInfo, CampInfo

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "card_templates"
CAMP_TEMPLATE = "camp_carousel.json"
BIVOUAC_TEMPLATE = "bivouac_carousel.json"

# LINE の text コンポーネントは空文字を受け付けない
EMPTY_TEXT = "-"


class TemplateShapeError(Exception):
    """テンプレートの構造が想定パスと一致しない"""


@lru_cache(maxsize=None)
def _read_template(name: str) -> str:
    return (TEMPLATE_DIR / name).read_text(encoding="utf-8")


def load_template(name: str) -> List[Dict[str, Any]]:
    """テンプレートを読み込む (呼び出しごとに新しいオブジェクト)"""
    return json.loads(_read_template(name))


def _set_text(bubble: Dict[str, Any], path: Sequence[Any], value: str) -> None:
    node: Any = bubble
    try:
        for key in path:
            node = node[key]
        node["text"] = value or EMPTY_TEXT
    except (KeyError, IndexError, TypeError) as e:
        raise TemplateShapeError(f"テンプレートのパス {list(path)} が見つかりません: {e}") from e


def _carousel(bubbles: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": "carousel", "contents": bubbles}


def compose_camp_carousel(
    records: List[CampInfo], template: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    bubbles = copy.deepcopy(template) if template is not None else load_template(CAMP_TEMPLATE)
    for bubble, record in zip(bubbles, records):
        _set_text(bubble, ("body", "contents", 0), record.name)
    logger.info(f"🃏 キャンプ場カード作成: {min(len(bubbles), len(records))}件")
    return _carousel(bubbles)


def compose_bivouac_carousel(
    records: List[BivouacInfo], template: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    bubbles = copy.deepcopy(template) if template is not None else load_template(BIVOUAC_TEMPLATE)
    for bubble, record in zip(bubbles, records):
        _set_text(bubble, ("body", "contents", 0), record.name)
        _set_text(bubble, ("body", "contents", 1, "contents", 1), record.spot)
        _set_text(bubble, ("body", "contents", 2, "contents", 1), record.description)
    logger.info(f"🃏 野営地カード作成: {min(len(bubbles), len(records))}件")
    return _carousel(bubbles)
