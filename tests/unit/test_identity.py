"""
Тесты для Identity и IdentityValidator

Проверяет:
1. Разбор RFC 4514 строк и каноническое строковое представление
2. Равенство и hash независимо от порядка атрибутов
3. Ограничения модели (обязательные атрибуты, страна, неподдерживаемые атрибуты)
4. Immutability (frozen=True)
5. Запрет маркера notary worker в common name
6. Длина common name notary service с учётом имени worker
"""

import pytest
from pydantic import ValidationError

from src.core.domain import Identity
from src.core.domain.identity import COMMON_NAME_MAX_LENGTH
from src.core.errors import InvalidIdentity, NetworkBuildError
from src.topology import NOTARY_WORKER_TAG, IdentityValidator


# =============================================================================
# IDENTITY PARSING
# =============================================================================


class TestIdentityParse:
    """Разбор и рендеринг distinguished names"""

    def test_parse_full_name(self) -> None:
        """Все поддерживаемые атрибуты"""
        identity = Identity.parse("CN=Alice, OU=Ledger, O=Alice Corp, L=London, ST=England, C=GB")
        assert identity.common_name == "Alice"
        assert identity.organization_unit == "Ledger"
        assert identity.organization == "Alice Corp"
        assert identity.locality == "London"
        assert identity.state == "England"
        assert identity.country == "GB"

    def test_parse_minimal_name(self) -> None:
        """Только обязательные O, L, C"""
        identity = Identity.parse("O=Bob, L=Paris, C=FR")
        assert identity.common_name is None
        assert identity.organization == "Bob"

    def test_parse_without_spaces(self) -> None:
        """Запятые без пробелов тоже допустимы"""
        assert Identity.parse("O=Bob,L=Paris,C=FR") == Identity.parse("O=Bob, L=Paris, C=FR")

    def test_str_is_canonical_order(self) -> None:
        """str() выдаёт CN, OU, O, L, ST, C независимо от входного порядка"""
        identity = Identity.parse("C=GB, L=London, O=Alice, CN=Alice Node")
        assert str(identity) == "CN=Alice Node, O=Alice, L=London, C=GB"

    def test_str_round_trip(self) -> None:
        """parse(str(x)) == x"""
        identity = Identity.parse("CN=Notary, O=R3, L=London, C=GB")
        assert Identity.parse(str(identity)) == identity

    def test_escaped_comma_in_value(self) -> None:
        """Экранированная запятая остаётся частью значения"""
        identity = Identity.parse(r"O=Alice\, Ltd, L=London, C=GB")
        assert identity.organization == "Alice, Ltd"
        assert str(identity) == r"O=Alice\, Ltd, L=London, C=GB"
        assert Identity.parse(str(identity)) == identity

    @pytest.mark.parametrize("value", ["a\\", "a\\\\", "a\\, b", "a\\,"])
    def test_trailing_backslash_round_trip(self, value: str) -> None:
        """Экранированный обратный слэш перед разделителем не экранирует запятую"""
        identity = Identity(common_name=value, organization="R3", locality="London", country="GB")
        assert Identity.parse(str(identity)) == identity

    def test_escaped_backslash_parsed(self) -> None:
        identity = Identity.parse(r"CN=a\\, O=R3, L=London, C=GB")
        assert identity.common_name == "a\\"
        assert identity.organization == "R3"

    def test_equality_ignores_attribute_order(self) -> None:
        a = Identity.parse("O=Alice, L=London, C=GB")
        b = Identity.parse("C=GB, O=Alice, L=London")
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_construct_directly(self) -> None:
        identity = Identity(organization="Alice", locality="London", country="GB")
        assert identity == Identity.parse("O=Alice, L=London, C=GB")


# =============================================================================
# IDENTITY CONSTRAINTS
# =============================================================================


class TestIdentityConstraints:
    """Невалидные имена"""

    def test_missing_organization(self) -> None:
        with pytest.raises(ValidationError):
            Identity.parse("CN=Alice, L=London, C=GB")

    def test_missing_locality(self) -> None:
        with pytest.raises(ValidationError):
            Identity.parse("O=Alice, C=GB")

    def test_lowercase_country_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Identity(organization="Alice", locality="London", country="gb")

    def test_three_letter_country_rejected(self) -> None:
        """cryptography отвергает C длиной != 2 ещё при разборе"""
        with pytest.raises(ValueError):
            Identity.parse("O=Alice, L=London, C=GBR")

    def test_unsupported_attribute(self) -> None:
        with pytest.raises(ValueError, match="Unsupported attribute"):
            Identity.parse("STREET=Main Road, O=Alice, L=London, C=GB")

    def test_duplicate_attribute(self) -> None:
        with pytest.raises(ValueError, match="Duplicate attribute"):
            Identity.parse("O=Alice, O=Bob, L=London, C=GB")

    def test_malformed_string(self) -> None:
        with pytest.raises(ValueError, match="Malformed"):
            Identity.parse("this is not a name")

    def test_common_name_too_long(self) -> None:
        with pytest.raises(ValidationError):
            Identity(common_name="x" * 65, organization="Alice", locality="London", country="GB")

    def test_identity_immutable(self) -> None:
        identity = Identity.parse("O=Alice, L=London, C=GB")
        with pytest.raises(ValidationError):
            identity.organization = "Mallory"  # type: ignore


# =============================================================================
# IDENTITY VALIDATOR
# =============================================================================


class TestIdentityValidator:
    """Маркер notary worker в common name"""

    @pytest.fixture
    def validator(self) -> IdentityValidator:
        return IdentityValidator()

    def test_plain_common_name_passes(self, validator: IdentityValidator) -> None:
        validator.validate(Identity.parse("CN=Alice, O=Alice, L=London, C=GB"))

    def test_no_common_name_passes(self, validator: IdentityValidator) -> None:
        validator.validate(Identity.parse("O=Alice, L=London, C=GB"))

    @pytest.mark.parametrize(
        "common_name",
        [NOTARY_WORKER_TAG, f"Notary {NOTARY_WORKER_TAG}", f"x{NOTARY_WORKER_TAG}y"],
    )
    def test_marker_in_common_name_fails(self, validator: IdentityValidator, common_name: str) -> None:
        identity = Identity(common_name=common_name, organization="R3", locality="London", country="GB")
        with pytest.raises(InvalidIdentity) as exc_info:
            validator.validate(identity)
        assert exc_info.value.common_name == common_name
        assert NOTARY_WORKER_TAG in str(exc_info.value)

    def test_marker_outside_common_name_passes(self, validator: IdentityValidator) -> None:
        """Проверяется только CN"""
        validator.validate(Identity(organization=NOTARY_WORKER_TAG, locality="London", country="GB"))

    def test_marker_is_case_sensitive(self, validator: IdentityValidator) -> None:
        validator.validate(
            Identity(common_name="notaryworker", organization="R3", locality="London", country="GB")
        )

    def test_invalid_identity_hierarchy(self) -> None:
        """InvalidIdentity — NetworkBuildError и ValueError"""
        error = InvalidIdentity("x", NOTARY_WORKER_TAG)
        assert isinstance(error, NetworkBuildError)
        assert isinstance(error, ValueError)

    def test_validate_all_stops_at_first_invalid(self, validator: IdentityValidator) -> None:
        good = Identity.parse("O=Alice, L=London, C=GB")
        bad = Identity(common_name=NOTARY_WORKER_TAG, organization="R3", locality="London", country="GB")
        with pytest.raises(InvalidIdentity):
            validator.validate_all([good, bad])


class TestNotaryServiceValidator:
    """Длина CN notary service с учётом суффикса worker"""

    @pytest.fixture
    def validator(self) -> IdentityValidator:
        return IdentityValidator()

    def test_longest_allowed_common_name(self, validator: IdentityValidator) -> None:
        max_length = COMMON_NAME_MAX_LENGTH - len(NOTARY_WORKER_TAG) - 1
        service = Identity(common_name="N" * max_length, organization="R3", locality="London", country="GB")
        validator.validate_notary_service(service)

    def test_common_name_one_over_limit(self, validator: IdentityValidator) -> None:
        max_length = COMMON_NAME_MAX_LENGTH - len(NOTARY_WORKER_TAG) - 1
        service = Identity(
            common_name="N" * (max_length + 1), organization="R3", locality="London", country="GB"
        )
        with pytest.raises(InvalidIdentity, match="too long"):
            validator.validate_notary_service(service)

    def test_members_keep_full_length(self, validator: IdentityValidator) -> None:
        """Ограничение касается только notary services"""
        member = Identity(
            common_name="N" * COMMON_NAME_MAX_LENGTH, organization="R3", locality="London", country="GB"
        )
        validator.validate(member)

    def test_no_common_name_passes(self, validator: IdentityValidator) -> None:
        validator.validate_notary_services([Identity.parse("O=R3, L=London, C=GB")])

    def test_marker_still_checked(self, validator: IdentityValidator) -> None:
        service = Identity(common_name=NOTARY_WORKER_TAG, organization="R3", locality="London", country="GB")
        with pytest.raises(InvalidIdentity, match="should not contain"):
            validator.validate_notary_service(service)
