from importlib.metadata import PackageNotFoundError
from unittest.mock import patch

from redis_record import version


def test_installed_version() -> None:
    with patch('redis_record.version.version', return_value='1.2.3'):
        assert version._get_version() == '1.2.3'


def test_version_from_source_tree() -> None:
    with patch('redis_record.version.version', side_effect=PackageNotFoundError('redis-record')):
        assert version._get_version() == version.BASE_VERSION + '+local'
