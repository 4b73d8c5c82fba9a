import argparse
import sys

import uvicorn

from core.common.app_settings import settings
from core.common.base import VERSION, API_BASE
from core.common.errors import ConfigError
from core.common.log import configure_logger
from core.common.log import logger
from core.integrations.supabase import load_supabase_settings


def parse_args():
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", help="监听地址", default="127.0.0.1")
    parser.add_argument("--port", help="监听端口", type=int, default=settings.port)
    return parser.parse_known_args()[0]


def log_app_banner() -> None:
    logger.info(f"名称:{settings.app_name}\n版本:{VERSION} API_BASE:{API_BASE}")


if __name__ == "__main__":
    args = parse_args()
    configure_logger(level=settings.log_level, log_file=settings.log_file)
    log_app_banner()

    # 缺少 Supabase 配置时拒绝启动
    try:
        load_supabase_settings()
    except ConfigError as e:
        logger.error(f"启动失败: {e.message}")
        sys.exit(1)

    logger.info("启动服务器")
    run_kwargs = {
        "app": "web:app",
        "host": args.host,
        "port": args.port,
        # 会话与文章状态保存在进程内，只能单进程运行
        "workers": 1,
    }
    if settings.auto_reload:
        run_kwargs.update({"reload": True, "reload_dirs": ["core", "apis", "schemas"]})

    uvicorn.run(**run_kwargs)
