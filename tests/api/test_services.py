"""Domain service tests against a real SQLite database."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from travel_backend.api.models import (
    ProductCreateRequest,
    ProductListQuery,
    ProductUpdateRequest,
    UserCreateRequest,
    UserListQuery,
    UserUpdateRequest,
)
from travel_backend.api.services import AuthService, Mapper, ProductService, UserService
from travel_backend.database import UnitOfWork
from travel_backend.shared import (
    Actor,
    DomainValidationError,
    DuplicateEntryError,
    ErrorCode,
    Gender,
    InternalError,
    NotFoundError,
    OrderType,
    UserRole,
)


@pytest.fixture
def products(uow: UnitOfWork) -> ProductService:
    return ProductService(uow, Mapper())


@pytest.fixture
def users(uow: UnitOfWork) -> UserService:
    return UserService(uow, Mapper(), AuthService(secret_key="test-secret-key"))


def _user_payload(**overrides: object) -> UserCreateRequest:
    data = {
        "first_name": "Fatimah",
        "full_name": "Fatimah Zahra",
        "gender": Gender.FEMALE,
        "email": "Fatimah@Example.com",
        "phone": "+628123456789",
        "password": "correct horse",
        "role": UserRole.CUSTOMER,
    }
    data.update(overrides)
    return UserCreateRequest.model_validate(data)


def test_create_product_stamps_actor_and_parses_price(
    products: ProductService, uow: UnitOfWork, actor: Actor
) -> None:
    created = products.create_product(
        ProductCreateRequest(name="Umrah Reguler", price="25000000.5"), actor
    )

    assert created.price == Decimal("25000000.50")
    assert created.is_active is True
    assert uow.products.find_by_id(created.id).created_by == actor.as_audit()


def test_create_product_requires_price() -> None:
    with pytest.raises(ValidationError) as exc_info:
        ProductCreateRequest(name="Free Talk")

    assert [error["loc"] for error in exc_info.value.errors()] == [("price",)]
    assert exc_info.value.errors()[0]["type"] == "missing"


@pytest.mark.parametrize("price", ["1e30", "12345678901234567"])
def test_create_product_rejects_out_of_range_price(price: str) -> None:
    with pytest.raises(ValidationError):
        ProductCreateRequest(name="Too Much", price=price)


def test_duplicate_product_name_is_a_duplicate_entry(
    products: ProductService, actor: Actor
) -> None:
    products.create_product(ProductCreateRequest(name="Same", price="10"), actor)

    with pytest.raises(DuplicateEntryError) as exc_info:
        products.create_product(ProductCreateRequest(name="Same", price="10"), actor)

    assert exc_info.value.code is ErrorCode.PRODUCT_NAME_EXISTS
    assert exc_info.value.details == {"name": "Same"}


def test_invalid_price_is_a_validation_error(
    products: ProductService, actor: Actor
) -> None:
    payload = ProductCreateRequest.model_construct(name="Bad", price="abc")

    with pytest.raises(DomainValidationError) as exc_info:
        products.create_product(payload, actor)

    assert exc_info.value.code is ErrorCode.VALIDATION
    assert exc_info.value.details == {"price": "INVALID_FORMAT"}


def test_list_products_paginates_and_filters(
    products: ProductService, actor: Actor
) -> None:
    for index in range(5):
        products.create_product(
            ProductCreateRequest(name=f"Trip {index}", price=f"{index + 1}0"), actor
        )

    page, pagination = products.list_products(
        ProductListQuery(page=2, size=2, order_by="price", order_type=OrderType.ASC)
    )
    cheap, _ = products.list_products(ProductListQuery(max_price=Decimal("20")))

    assert [product.name for product in page] == ["Trip 2", "Trip 3"]
    assert pagination is not None
    assert pagination.model_dump() == {
        "total_items": 5,
        "total_pages": 3,
        "current_page": 2,
        "page_size": 2,
    }
    assert [product.name for product in cheap] == ["Trip 1", "Trip 0"]


def test_list_products_empty_has_no_pagination(products: ProductService) -> None:
    items, pagination = products.list_products(ProductListQuery())

    assert items == []
    assert pagination is None


def test_list_products_wraps_storage_errors() -> None:
    failing = MagicMock(spec=UnitOfWork)
    failing.in_transaction = False
    failing.products.count.side_effect = OperationalError("SELECT", {}, Exception())
    failing.products.find_all.return_value = []
    service = ProductService(failing, Mapper())

    with pytest.raises(InternalError):
        service.list_products(ProductListQuery())


def test_update_product_keeps_unset_fields(
    products: ProductService, actor: Actor
) -> None:
    created = products.create_product(
        ProductCreateRequest(name="Original", description="desc", price="10"), actor
    )
    editor = Actor(id=9, name="editor")

    updated = products.update_product(
        created.id, ProductUpdateRequest(price="12.345"), editor
    )

    assert updated.name == "Original"
    assert updated.description == "desc"
    assert updated.price == Decimal("12.35")
    assert updated.modified_on is not None


def test_update_into_existing_name_is_rejected(
    products: ProductService, actor: Actor
) -> None:
    products.create_product(ProductCreateRequest(name="Taken", price="10"), actor)
    other = products.create_product(ProductCreateRequest(name="Free", price="10"), actor)

    with pytest.raises(DuplicateEntryError) as exc_info:
        products.update_product(other.id, ProductUpdateRequest(name="Taken"), actor)

    assert exc_info.value.code is ErrorCode.PRODUCT_NAME_EXISTS
    assert exc_info.value.details == {"name": "Taken"}
    assert products.get_product(other.id).name == "Free"


def test_missing_product_reports_product_not_found(
    products: ProductService, actor: Actor
) -> None:
    with pytest.raises(NotFoundError) as get_error:
        products.get_product(123)
    with pytest.raises(NotFoundError) as update_error:
        products.update_product(123, ProductUpdateRequest(name="x"), actor)
    with pytest.raises(NotFoundError) as delete_error:
        products.delete_product(123, actor)

    for error in (get_error, update_error, delete_error):
        assert error.value.code is ErrorCode.PRODUCT_NOT_FOUND


def test_delete_product_hides_it(products: ProductService, actor: Actor) -> None:
    created = products.create_product(ProductCreateRequest(name="Gone", price="10"), actor)

    products.delete_product(created.id, actor)

    with pytest.raises(NotFoundError):
        products.get_product(created.id)
    assert products.list_products(ProductListQuery())[0] == []


def test_create_user_hashes_password(
    users: UserService, uow: UnitOfWork, actor: Actor
) -> None:
    created = users.create_user(_user_payload(), actor)

    stored = uow.users.find_by_id(created.id)
    assert created.email == "fatimah@example.com"
    assert created.is_verified is False
    assert "correct horse" not in stored.password_hash
    assert stored.password_hash.count(":") == 1


def test_duplicate_email_and_phone_codes(users: UserService, actor: Actor) -> None:
    users.create_user(_user_payload(), actor)

    with pytest.raises(DuplicateEntryError) as email_error:
        users.create_user(_user_payload(phone="+628000000001"), actor)
    with pytest.raises(DuplicateEntryError) as phone_error:
        users.create_user(_user_payload(email="other@example.com"), actor)

    assert email_error.value.code is ErrorCode.EMAIL_EXISTS
    assert email_error.value.details == {"email": "fatimah@example.com"}
    assert phone_error.value.code is ErrorCode.PHONE_EXISTS


def test_update_into_taken_phone_is_rejected(
    users: UserService, actor: Actor
) -> None:
    users.create_user(_user_payload(), actor)
    other = users.create_user(
        _user_payload(email="other@example.com", phone="+628000000002"), actor
    )

    with pytest.raises(DuplicateEntryError) as exc_info:
        users.update_user(other.id, UserUpdateRequest(phone="+628123456789"), actor)

    assert exc_info.value.code is ErrorCode.PHONE_EXISTS
    assert exc_info.value.details == {"phone": "+628123456789"}
    assert users.get_user(other.id).phone == "+628000000002"


def test_update_and_delete_user(users: UserService, actor: Actor) -> None:
    created = users.create_user(_user_payload(), actor)

    updated = users.update_user(
        created.id, UserUpdateRequest(middle_name="Az"), actor
    )
    users.delete_user(created.id, actor)

    assert updated.middle_name == "Az"
    assert updated.full_name == "Fatimah Zahra"
    with pytest.raises(NotFoundError) as exc_info:
        users.get_user(created.id)
    assert exc_info.value.code is ErrorCode.USER_NOT_FOUND


def test_list_users_search(users: UserService, actor: Actor) -> None:
    users.create_user(_user_payload(), actor)
    users.create_user(
        _user_payload(
            first_name="Ahmad",
            full_name="Ahmad Dahlan",
            email="ahmad@example.com",
            phone="+628999",
            role=UserRole.MUTHAWIF,
        ),
        actor,
    )

    found, pagination = users.list_users(UserListQuery(search="dahlan"))
    guides, _ = users.list_users(UserListQuery(role=UserRole.MUTHAWIF))

    assert [user.full_name for user in found] == ["Ahmad Dahlan"]
    assert [user.full_name for user in guides] == ["Ahmad Dahlan"]
    assert pagination is not None
    assert pagination.total_items == 1
