# tests/conftest.py
"""项目全局共享的测试 Fixtures。"""

from collections.abc import AsyncGenerator, Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from pytest_mock import MockerFixture
from rich.console import Console
from sqlalchemy.ext.asyncio import AsyncEngine

from trans_relay.config import (
    DatabaseSettings,
    DocsSiteSettings,
    RetryPolicySettings,
    TransRelayConfig,
    VendorSettings,
)
from trans_relay.infrastructure.db import (
    create_all_tables,
    create_async_db_engine,
    create_async_sessionmaker,
    dispose_engine,
)
from trans_relay.infrastructure.uow import SqlAlchemyUnitOfWork

from tests.helpers.vendor_api import DOCS_BASE_URL, VENDOR_API_URL


@pytest.fixture(scope="session", autouse=True)
def disable_rich_colors_for_tests(
    session_mocker: MockerFixture,
) -> Generator[None, None, None]:
    """全局禁用 rich 库的颜色输出，以确保测试结果的确定性。"""
    original_init = Console.__init__

    def new_init(self: Console, *args: Any, **kwargs: Any) -> None:
        kwargs["force_terminal"] = False
        kwargs["color_system"] = None
        original_init(self, *args, **kwargs)

    session_mocker.patch("rich.console.Console.__init__", new=new_init)
    yield


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """模拟文档仓库根目录；slug 是相对该目录的路径。"""
    root = tmp_path / "docs-repo"
    root.mkdir()
    return root


@pytest.fixture
def write_doc(content_dir: Path) -> Callable[[str, str], Path]:
    """在文档仓库中写入一个源文件。"""

    def _write(slug: str, text: str = "# Title\n\nBody text.\n") -> Path:
        path = content_dir / slug
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def test_config(tmp_path: Path, content_dir: Path) -> TransRelayConfig:
    """指向临时 SQLite 文件与假供应商的完整配置。"""
    return TransRelayConfig(
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'relay.db'}"),
        retry_policy=RetryPolicySettings(initial_backoff=0.0),
        vendor=VendorSettings(
            api_url=VENDOR_API_URL,
            user_identifier="relay-user",
            user_secret="relay-secret",
            project_id="proj-1",
            locale_ids={"jp": "ja-JP", "kr": "ko-KR"},
        ),
        docs_site=DocsSiteSettings(base_url=DOCS_BASE_URL, content_dir=content_dir),
    )


@pytest_asyncio.fixture
async def db_engine(test_config: TransRelayConfig) -> AsyncGenerator[AsyncEngine, None]:
    """每个测试独立的 SQLite 数据库，已建表。"""
    engine = create_async_db_engine(test_config)
    await create_all_tables(engine)
    yield engine
    await dispose_engine(engine)


@pytest.fixture
def uow_factory(db_engine: AsyncEngine) -> Callable[[], SqlAlchemyUnitOfWork]:
    sessionmaker = create_async_sessionmaker(db_engine)
    return lambda: SqlAlchemyUnitOfWork(sessionmaker)
