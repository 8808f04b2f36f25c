"""Tests for the route guard."""

import pytest
from unittest.mock import MagicMock

from modules.auth.guard import DEFAULT_PLACEHOLDER, GuardState, RouteGuard, evaluate
from modules.auth.models import AuthState, User


USER = User(id="1", email="a@b.com")


class TestEvaluate:
    def test_loading_is_checking_regardless_of_user(self):
        assert evaluate(AuthState(loading=True)) is GuardState.CHECKING
        assert evaluate(AuthState(user=USER, loading=True)) is GuardState.CHECKING

    def test_no_user_is_denied(self):
        assert evaluate(AuthState(loading=False)) is GuardState.DENIED

    def test_error_without_user_is_denied(self):
        """A failed check is treated like no session."""
        assert evaluate(AuthState(loading=False, error="boom")) is GuardState.DENIED

    def test_user_is_granted(self):
        assert evaluate(AuthState(user=USER, loading=False)) is GuardState.GRANTED


class TestRouteGuard:
    @pytest.fixture
    def navigate(self):
        return MagicMock()

    def test_checking_renders_placeholder(self, auth, navigate):
        """While loading, the placeholder shows and nobody is redirected."""
        guard = RouteGuard(auth, navigate)
        protected = MagicMock(return_value="secret")
        assert guard.render(protected) == DEFAULT_PLACEHOLDER
        protected.assert_not_called()
        navigate.assert_not_called()

    def test_custom_placeholder(self, auth, navigate):
        guard = RouteGuard(auth, navigate)
        assert guard.render(lambda: "secret", placeholder="spinner") == "spinner"

    @pytest.mark.asyncio
    async def test_denied_renders_nothing_and_redirects_once(self, auth, navigate):
        await auth.start()
        guard = RouteGuard(auth, navigate)
        protected = MagicMock(return_value="secret")

        assert guard.render(protected) is None
        assert guard.render(protected) is None
        assert guard.state is GuardState.DENIED

        protected.assert_not_called()
        navigate.assert_called_once_with("/login")

    @pytest.mark.asyncio
    async def test_reading_state_does_not_navigate(self, auth, navigate):
        """An unmounted guard reports its state without redirecting."""
        await auth.start()
        guard = RouteGuard(auth, navigate)
        assert guard.state is GuardState.DENIED
        assert guard.state is GuardState.DENIED
        navigate.assert_not_called()

    @pytest.mark.asyncio
    async def test_custom_login_path(self, auth, navigate):
        await auth.start()
        RouteGuard(auth, navigate, login_path="/signin").mount()
        navigate.assert_called_once_with("/signin")

    @pytest.mark.asyncio
    async def test_granted_renders_protected(self, auth, store, navigate):
        store.save(USER)
        await auth.start()
        guard = RouteGuard(auth, navigate)
        assert guard.render(lambda: "secret") == "secret"
        assert guard.state is GuardState.GRANTED
        navigate.assert_not_called()

    @pytest.mark.asyncio
    async def test_mounted_guard_follows_context(self, auth, navigate):
        """A mounted guard should move Checking -> Denied -> Granted."""
        with RouteGuard(auth, navigate) as guard:
            assert guard.state is GuardState.CHECKING
            await auth.start()
            assert guard.state is GuardState.DENIED
            await auth.login("a@b.com", "pw")
            assert guard.state is GuardState.GRANTED
        navigate.assert_called_once_with("/login")
        assert guard.mounted is False

    @pytest.mark.asyncio
    async def test_navigation_that_notifies_does_not_loop(self, auth):
        """Re-evaluation with unchanged inputs must not redirect again."""
        await auth.start()
        calls: list[str] = []

        def navigate(path: str) -> None:
            calls.append(path)
            # A router that touches state on navigation; user/loading unchanged
            auth._set(error="redirected")

        with RouteGuard(auth, navigate):
            pass
        assert calls == ["/login"]

    @pytest.mark.asyncio
    async def test_new_denial_redirects_again(self, auth, navigate):
        """After leaving Denied, a later denial redirects again."""
        await auth.start()
        with RouteGuard(auth, navigate) as guard:
            await auth.login("a@b.com", "pw")
            assert guard.state is GuardState.GRANTED
            await auth.logout()
            assert guard.state is GuardState.DENIED
        assert navigate.call_count == 2

    @pytest.mark.asyncio
    async def test_failed_check_is_denied(self, auth, store, navigate):
        """A storage failure during the check must not expose content."""
        store.fail_load = True
        await auth.start()
        guard = RouteGuard(auth, navigate)
        assert guard.render(lambda: "secret") is None
        navigate.assert_called_once()

    @pytest.mark.asyncio
    async def test_unmount_stops_following(self, auth, navigate):
        guard = RouteGuard(auth, navigate)
        guard.mount()
        guard.unmount()
        await auth.start()
        assert guard._state is GuardState.CHECKING
        navigate.assert_not_called()
