from pydantic import BaseModel


class CampInfo(BaseModel):
    """
    生成結果から抽出したキャンプ場 1件
    """
    name: str


class BivouacInfo(BaseModel):
    """
    生成結果から抽出した野営地 1件 (おすすめスポット / 特徴・注意点 付き)
    """
    name: str
    spot: str = ""
    description: str = ""


class ItemInfo(BaseModel):
    """
    生成結果から抽出した持ち物 1件
    """
    name: str
    description: str = ""
