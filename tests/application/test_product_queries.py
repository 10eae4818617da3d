"""Integration tests for catalog queries and category management."""

import pytest

from storefront.application.delete_category import DeleteCategoryHandler
from storefront.application.list_products import ListCategoryProductsHandler, ListProductsHandler
from storefront.application.show_category import ShowCategoryHandler
from storefront.application.show_product import ShowProductHandler
from storefront.application.update_category import UpdateCategoryHandler
from storefront.domain.exceptions import EntityNotFoundError, ForbiddenError, ValidationError
from storefront.domain.model.category import Category
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductQuery
from tests.builders import ADMIN, ALICE, make_product
from tests.fakes import FakeCategoryRepository, FakeProductRepository


def _catalog() -> FakeProductRepository:
    """Five products: #4 is unpublished, #5 is sold out, #1 and #3 are tools."""
    widget = make_product("1", "Widget", price="20.00")
    gadget = make_product("2", "Gadget", price="5.00")
    hammer = make_product("3", "Hammer", price="12.50")
    draft = make_product("4", "Prototype", price="99.00")
    sold_out = make_product("5", "Sprocket", price="8.00", quantity=3, reserved=3)
    widget.category_ids = ["1"]
    hammer.category_ids = ["1"]
    draft.is_published = False
    return FakeProductRepository([widget, gadget, hammer, draft, sold_out])


def _ids(page) -> list[str]:
    return [p.id for p in page.products]


class TestListProducts:

    def test_published_only_by_default(self):
        page = ListProductsHandler(_catalog()).handle(ALICE, ProductQuery(sort_by="id"))
        assert _ids(page) == ["5", "3", "2", "1"]
        assert page.total == 4

    def test_admin_sees_whole_catalog(self):
        query = ProductQuery(published_only=False, sort_by="id", descending=False)
        page = ListProductsHandler(_catalog()).handle(ADMIN, query)
        assert _ids(page) == ["1", "2", "3", "4", "5"]

    def test_customer_cannot_see_unpublished(self):
        with pytest.raises(ForbiddenError):
            ListProductsHandler(_catalog()).handle(ALICE, ProductQuery(published_only=False))

    def test_category_filter(self):
        query = ProductQuery(category_id="1", sort_by="name", descending=False)
        page = ListProductsHandler(_catalog()).handle(ALICE, query)
        assert [p.name for p in page.products] == ["Hammer", "Widget"]

    def test_price_range_is_inclusive(self):
        query = ProductQuery(
            min_price=Money.of("8.00"), max_price=Money.of("20.00"),
            sort_by="price", descending=False,
        )
        page = ListProductsHandler(_catalog()).handle(ALICE, query)
        assert _ids(page) == ["5", "3", "1"]

    def test_in_stock_skips_fully_reserved(self):
        page = ListProductsHandler(_catalog()).handle(ALICE, ProductQuery(in_stock=True))
        assert "5" not in _ids(page)
        assert page.total == 3

    def test_paging(self):
        handler = ListProductsHandler(_catalog())
        query = ProductQuery(page=2, limit=3, sort_by="id", descending=False)

        page = handler.handle(ALICE, query)

        assert _ids(page) == ["5"]
        assert (page.count, page.total, page.total_pages) == (1, 4, 2)

    def test_page_past_the_end_is_empty(self):
        page = ListProductsHandler(_catalog()).handle(ALICE, ProductQuery(page=9))
        assert page.products == []
        assert page.total == 4

    @pytest.mark.parametrize("kwargs, message", [
        ({"page": 0}, "Page must be a positive integer"),
        ({"limit": 0}, "Limit must be between 1 and 100"),
        ({"limit": 101}, "Limit must be between 1 and 100"),
        ({"sort_by": "colour"}, "Cannot sort by 'colour'"),
        ({"min_price": Money.of("10"), "max_price": Money.of("5")}, "cannot exceed maximum"),
    ])
    def test_invalid_query(self, kwargs, message):
        with pytest.raises(ValidationError, match=message):
            ProductQuery(**kwargs)


class TestShowProduct:

    def test_by_id_or_slug(self):
        handler = ShowProductHandler(_catalog())
        assert handler.handle(ALICE, "3").name == "Hammer"
        assert handler.handle(ALICE, "hammer").id == "3"

    def test_unpublished_is_hidden_from_customers(self):
        handler = ShowProductHandler(_catalog())
        with pytest.raises(EntityNotFoundError, match="Product 'prototype' not found"):
            handler.handle(ALICE, "prototype")
        assert handler.handle(ADMIN, "prototype").id == "4"

    def test_missing_product(self):
        with pytest.raises(EntityNotFoundError, match="Product '42' not found"):
            ShowProductHandler(_catalog()).handle(ADMIN, "42")


class TestCategoryQueries:

    def test_show_by_id_or_slug(self):
        categories = FakeCategoryRepository([Category("1", "Garden Tools")])
        handler = ShowCategoryHandler(categories)
        assert handler.handle("1").name == "Garden Tools"
        assert handler.handle("garden-tools").id == "1"
        with pytest.raises(EntityNotFoundError, match="Category 'kitchen' not found"):
            handler.handle("kitchen")

    def test_products_in_category_by_slug(self):
        categories = FakeCategoryRepository([Category("1", "Tools")])
        handler = ListCategoryProductsHandler(categories, _catalog())

        page = handler.handle(ALICE, "tools", ProductQuery(sort_by="price"))

        assert [p.name for p in page.products] == ["Widget", "Hammer"]

    def test_products_in_unknown_category(self):
        handler = ListCategoryProductsHandler(FakeCategoryRepository(), _catalog())
        with pytest.raises(EntityNotFoundError):
            handler.handle(ALICE, "tools")


class TestUpdateCategory:

    def test_rename_moves_slug(self):
        categories = FakeCategoryRepository([Category("1", "Tools")])

        category = UpdateCategoryHandler(categories).handle(
            ADMIN, "1", name=" Garden Tools ", description=" Outdoor ",
        )

        assert (category.name, category.slug) == ("Garden Tools", "garden-tools")
        assert categories.get_by_slug("garden-tools").description == "Outdoor"

    def test_rename_onto_another_category_rejected(self):
        categories = FakeCategoryRepository([Category("1", "Tools"), Category("2", "Garden")])
        with pytest.raises(ValidationError, match="Category 'tools' already exists"):
            UpdateCategoryHandler(categories).handle(ADMIN, "2", name="tools")

    def test_customer_cannot_update(self):
        categories = FakeCategoryRepository([Category("1", "Tools")])
        with pytest.raises(ForbiddenError):
            UpdateCategoryHandler(categories).handle(ALICE, "1", name="Hardware")

    def test_missing_category(self):
        with pytest.raises(EntityNotFoundError, match="Category not found with ID: 3"):
            UpdateCategoryHandler(FakeCategoryRepository()).handle(ADMIN, "3", name="X")


class TestDeleteCategory:

    def test_deletes_unused_category(self):
        categories = FakeCategoryRepository([Category("2", "Kitchen")])
        DeleteCategoryHandler(categories, _catalog()).handle(ADMIN, "2")
        assert categories.get_by_id("2") is None

    def test_category_in_use_is_kept(self):
        categories = FakeCategoryRepository([Category("1", "Tools")])

        with pytest.raises(ValidationError) as exc_info:
            DeleteCategoryHandler(categories, _catalog()).handle(ADMIN, "1")

        assert exc_info.value.errors == ["Widget (#1)", "Hammer (#3)"]
        assert categories.get_by_id("1") is not None

    def test_customer_cannot_delete(self):
        categories = FakeCategoryRepository([Category("2", "Kitchen")])
        with pytest.raises(ForbiddenError):
            DeleteCategoryHandler(categories, _catalog()).handle(ALICE, "2")
