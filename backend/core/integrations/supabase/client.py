from typing import Optional, Dict, Any

from supabase import create_client, Client, ClientOptions

from core.integrations.supabase.settings import SupabaseSettings
from core.common.log import logger


def create_supabase(settings: SupabaseSettings, storage: Any = None) -> Client:
    """创建 Supabase 客户端（anon key + 用户会话）

    storage 为认证会话的持久化适配器；关闭自动刷新，会话变更回调只在调用方线程触发
    """
    option_kwargs: Dict[str, Any] = {"auto_refresh_token": False, "persist_session": True}
    if storage is not None:
        option_kwargs["storage"] = storage

    try:
        client = create_client(
            settings.url, settings.anon_key, options=ClientOptions(**option_kwargs)
        )
        logger.info("Supabase客户端初始化成功")
        return client
    except Exception as e:
        logger.error(f"Supabase客户端初始化失败: {e}")
        raise


class SupabaseClient:
    """Supabase 表操作封装"""

    FILTER_OPS = ("gt", "gte", "lt", "lte", "neq", "like", "ilike", "in")

    def __init__(self, client: Client):
        self.client = client

    def from_table(self, table_name: str):
        """获取表操作对象"""
        return self.client.table(table_name)

    def _apply_filters(self, query, filters: Optional[Dict]):
        """支持 {"col": value} 等值过滤以及 {"col": {"gt": 10}} 形式的比较过滤"""
        for key, value in (filters or {}).items():
            if isinstance(value, dict):
                for op, val in value.items():
                    if op not in self.FILTER_OPS:
                        raise ValueError(f"不支持的过滤操作: {op}")
                    method = "in_" if op == "in" else op
                    query = getattr(query, method)(key, val)
            else:
                query = query.eq(key, value)
        return query

    @staticmethod
    def _apply_order(query, order: str):
        """order 形如 "created_at" 或 "created_at.desc" """
        column, _, direction = order.partition(".")
        return query.order(column, desc=direction.lower() == "desc")

    #! 以下为基础CRUD操作
    async def select(
        self,
        table: str,
        filters: Optional[Dict] = None,
        columns: str = "*",
        order: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ):
        """查询数据"""
        try:
            query = self._apply_filters(self.from_table(table).select(columns), filters)

            if order:
                query = self._apply_order(query, order)

            if limit:
                query = query.limit(limit)
            if offset:
                query = query.offset(offset)

            response = query.execute()
            return response.data if response.data else []

        except Exception as e:
            logger.error(f"查询表 {table} 失败: {e}")
            raise

    async def insert(self, table: str, data: Dict):
        """插入数据，返回落库后的记录"""
        try:
            response = self.from_table(table).insert(data).execute()
            return response.data[0] if response.data else {}
        except Exception as e:
            logger.error(f"插入数据到表 {table} 失败: {e}")
            raise

    async def update(self, table: str, data: Dict, filters: Dict):
        """更新数据，返回被更新的记录列表"""
        try:
            query = self._apply_filters(self.from_table(table).update(data), filters)
            response = query.execute()
            return response.data if response.data else []

        except Exception as e:
            logger.error(f"更新表 {table} 失败: {e}")
            raise

    async def delete(self, table: str, filters: Dict):
        """删除数据"""
        try:
            query = self._apply_filters(self.from_table(table).delete(), filters)
            response = query.execute()
            return response.data if response.data else []

        except Exception as e:
            logger.error(f"删除表 {table} 数据失败: {e}")
            raise
