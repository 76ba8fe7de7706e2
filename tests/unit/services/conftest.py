import os
from unittest.mock import MagicMock

import pytest

from services.shared.domain import UserId

# ハンドラーはモジュール読み込み時に boto3 リソースを生成する
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("TABLE_NAME", "test-booking-table")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "booking-service-test")


@pytest.fixture
def user_id():
    """全テスト共通の UserId フィクスチャ"""
    return UserId(value="user-123")


@pytest.fixture
def other_user_id():
    return UserId(value="user-999")


@pytest.fixture
def mock_logger():
    """Powertools Logger のモックフィクスチャ"""
    return MagicMock()
