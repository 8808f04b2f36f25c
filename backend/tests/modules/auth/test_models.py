"""Tests for auth module models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from modules.auth.models import (
    AuthState,
    OperationResult,
    ProfileUpdate,
    Subscription,
    User,
    merge_profile,
)


class TestUser:
    def test_minimal_user(self):
        """Only id and email are required."""
        user = User(id="1", email="a@b.com")
        assert user.name is None
        assert user.subscription is None
        assert user.shopify_linked is False

    def test_accepts_camel_case_keys(self):
        """The persisted camelCase shape should validate."""
        user = User.model_validate({
            "id": "1",
            "email": "a@b.com",
            "shopifyStore": "demo.myshopify.com",
            "shopifyAccessToken": "shpat_1",
            "stripeCustomerId": "cus_1",
        })
        assert user.shopify_store == "demo.myshopify.com"
        assert user.stripe_customer_id == "cus_1"
        assert user.shopify_linked is True

    def test_requires_email(self):
        """An empty email is not a valid user."""
        with pytest.raises(PydanticValidationError):
            User(id="1", email="")

    def test_store_without_token_rejected(self):
        """Partial Shopify linkage is not a valid state."""
        with pytest.raises(PydanticValidationError):
            User(id="1", email="a@b.com", shopify_store="demo.myshopify.com")

    def test_token_without_store_rejected(self):
        """A token without its store is also partial linkage."""
        with pytest.raises(PydanticValidationError):
            User(id="1", email="a@b.com", shopify_access_token="shpat_1")

    def test_user_is_immutable(self):
        """Users are replaced wholesale, never mutated."""
        user = User(id="1", email="a@b.com")
        with pytest.raises(PydanticValidationError):
            user.name = "changed"

    def test_to_record_omits_none(self):
        """to_record should produce the compact camelCase shape."""
        user = User(
            id="1",
            email="a@b.com",
            subscription=Subscription(id="sub_1", plan="pro", status="active", current_period_end=10),
        )
        assert user.to_record() == {
            "id": "1",
            "email": "a@b.com",
            "subscription": {
                "id": "sub_1",
                "plan": "pro",
                "status": "active",
                "currentPeriodEnd": 10,
            },
        }


class TestProfileUpdate:
    def test_changes_only_include_set_fields(self):
        """Fields not given by the caller should not be in the changes."""
        update = ProfileUpdate(name="X")
        assert update.changes() == {"name": "X"}

    def test_explicit_none_is_a_change(self):
        """Explicitly clearing a field should be kept."""
        update = ProfileUpdate(name=None)
        assert update.changes() == {"name": None}

    def test_id_is_rejected(self):
        """The user ID cannot be changed through an update."""
        with pytest.raises(PydanticValidationError):
            ProfileUpdate.model_validate({"id": "2"})

    def test_unknown_field_rejected(self):
        """Unknown keys should be rejected, not ignored."""
        with pytest.raises(PydanticValidationError):
            ProfileUpdate.model_validate({"nickname": "X"})


class TestMergeProfile:
    def test_merge_keeps_untouched_fields(self):
        """Merging a name should leave id and email alone."""
        user = User(id="1", email="a@b.com")
        merged = merge_profile(user, ProfileUpdate(name="X"))
        assert merged == User(id="1", email="a@b.com", name="X")

    def test_merge_returns_new_instance(self):
        """The original user should be unchanged."""
        user = User(id="1", email="a@b.com")
        merge_profile(user, ProfileUpdate(name="X"))
        assert user.name is None

    def test_merge_nested_subscription(self):
        """A subscription can be attached through an update."""
        user = User(id="1", email="a@b.com")
        sub = Subscription(id="sub_1", plan="pro", status="active", current_period_end=10)
        merged = merge_profile(user, ProfileUpdate(subscription=sub))
        assert merged.subscription == sub

    def test_merge_partial_linkage_rejected(self):
        """Setting only the store on an unlinked user breaks the invariant."""
        user = User(id="1", email="a@b.com")
        with pytest.raises(PydanticValidationError):
            merge_profile(user, ProfileUpdate(shopify_store="demo.myshopify.com"))


class TestAuthState:
    def test_defaults_to_loading(self):
        """A fresh state is loading with no user."""
        state = AuthState()
        assert state.loading is True
        assert state.user is None
        assert state.authenticated is False

    def test_authenticated(self):
        state = AuthState(user=User(id="1", email="a@b.com"), loading=False)
        assert state.authenticated is True

    def test_operation_result_failure_shape(self):
        """A failed result should carry the error dict."""
        result = OperationResult(
            ok=False,
            state=AuthState(loading=False, error="nope"),
            error={"error": "X", "message": "nope", "details": {}},
        )
        assert result.ok is False
        assert result.error["message"] == "nope"
