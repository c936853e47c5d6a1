"""
ユーザーストア

userId をキーに「現在のステート」と「収集中データ(JSON文字列)」を保存する。
- InMemoryUserStore: プロセス内 dict (開発・テスト用)
- DynamoUserStore: DynamoDB テーブル (本番用)
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import ClientError
from pydantic import BaseModel

logger = logging.getLogger(__name__)

USER_ID_KEY = "userId"


class UserRecord(BaseModel):
    user_id: str
    state: Optional[str] = None
    data: Optional[str] = None

    def to_item(self) -> Dict[str, Any]:
        item: Dict[str, Any] = {USER_ID_KEY: self.user_id}
        if self.state:
            item["state"] = self.state
        if self.data:
            item["data"] = self.data
        return item

    @classmethod
    def from_item(cls, user_id: str, item: Optional[Dict[str, Any]]) -> "UserRecord":
        if not item:
            return cls(user_id=user_id)
        return cls(user_id=user_id, state=item.get("state"), data=item.get("data"))


class UserStore(ABC):
    @abstractmethod
    async def get(self, user_id: str) -> UserRecord:
        """ユーザーレコード取得 (存在しなければ空のレコード)"""

    @abstractmethod
    async def put(self, record: UserRecord) -> None:
        """レコードを丸ごと上書き保存"""

    async def clear(self, user_id: str) -> None:
        """userId だけのレコードで上書き (何度呼んでも同じ形)"""
        await self.put(UserRecord(user_id=user_id))

    @abstractmethod
    async def register(self, user_id: str) -> None:
        """未登録なら userId だけのレコードを作る。既存レコードには触らない"""


class InMemoryUserStore(UserStore):
    def __init__(self):
        self.items: Dict[str, Dict[str, Any]] = {}

    async def get(self, user_id: str) -> UserRecord:
        return UserRecord.from_item(user_id, self.items.get(user_id))

    async def put(self, record: UserRecord) -> None:
        self.items[record.user_id] = record.to_item()
        logger.info(f"[STORE] put {record.user_id}: state={record.state}")

    async def register(self, user_id: str) -> None:
        if user_id not in self.items:
            self.items[user_id] = {USER_ID_KEY: user_id}
            logger.info(f"[STORE] 新規ユーザー登録: {user_id}")


class DynamoUserStore(UserStore):
    """boto3 は同期APIなので asyncio.to_thread で呼び出す"""

    def __init__(self, table):
        self.table = table

    @classmethod
    def from_settings(cls, table_name: str, region: str) -> "DynamoUserStore":
        resource = boto3.resource("dynamodb", region_name=region)
        return cls(resource.Table(table_name))

    async def get(self, user_id: str) -> UserRecord:
        response = await asyncio.to_thread(
            self.table.get_item,
            Key={USER_ID_KEY: user_id},
            ConsistentRead=True,
        )
        return UserRecord.from_item(user_id, response.get("Item"))

    async def put(self, record: UserRecord) -> None:
        await asyncio.to_thread(self.table.put_item, Item=record.to_item())
        logger.info(f"[STORE] put {record.user_id}: state={record.state}")

    async def register(self, user_id: str) -> None:
        try:
            await asyncio.to_thread(
                self.table.put_item,
                Item={USER_ID_KEY: user_id},
                ConditionExpression=f"attribute_not_exists({USER_ID_KEY})",
            )
            logger.info(f"[STORE] 新規ユーザー登録: {user_id}")
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") != "ConditionalCheckFailedException":
                raise
            logger.info(f"[STORE] 登録済みユーザー: {user_id}")


def create_user_store(backend: str, table_name: str = "", region: str = "") -> UserStore:
    if backend == "dynamodb":
        logger.info(f"🗄️ DynamoDB ユーザーストア使用: table={table_name}")
        return DynamoUserStore.from_settings(table_name, region)
    if backend != "memory":
        logger.warning(f"⚠️ 未知の USER_STORE_BACKEND '{backend}' -> memory を使用")
    return InMemoryUserStore()
