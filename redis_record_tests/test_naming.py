import pytest

from redis_record import DescriptorError, RenameRule
from redis_record.naming import transform_field_name


@pytest.mark.parametrize(
    ['rule', 'expected'],
    [
        ('lowercase', 'user_id'),
        ('UPPERCASE', 'USER_ID'),
        ('PascalCase', 'UserId'),
        ('camelCase', 'userId'),
        ('snake_case', 'user_id'),
        ('SCREAMING_SNAKE_CASE', 'USER_ID'),
        ('kebab-case', 'user-id'),
        ('SCREAMING-KEBAB-CASE', 'USER-ID'),
    ]
)
def test_rename_rules(rule: str, expected: str) -> None:
    rename_rule = RenameRule.parse(rule)
    assert rename_rule is not None
    assert rename_rule.apply_to_field('user_id') == expected


def test_camel_case_single_word() -> None:
    assert RenameRule.CAMEL.apply_to_field('id') == 'id'
    assert RenameRule.PASCAL.apply_to_field('id') == 'Id'


def test_camel_case_many_words() -> None:
    assert RenameRule.CAMEL.apply_to_field('last_login_at') == 'lastLoginAt'


def test_no_rule() -> None:
    assert RenameRule.parse(None) is None
    assert RenameRule.parse('none') is None
    assert transform_field_name('user_id', None, None) == 'user_id'


def test_parse_rule_instance() -> None:
    assert RenameRule.parse(RenameRule.KEBAB) is RenameRule.KEBAB


def test_unknown_rule() -> None:
    with pytest.raises(DescriptorError) as e:
        RenameRule.parse('Title Case')
    assert "unknown rename rule 'Title Case'" in str(e.value)


def test_field_rename_wins() -> None:
    assert transform_field_name('user_id', RenameRule.SCREAMING_SNAKE, 'uid') == 'uid'
    assert transform_field_name('user_id', RenameRule.SCREAMING_SNAKE, None) == 'USER_ID'
