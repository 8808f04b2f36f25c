from modules.auth.context import AuthContext
from modules.auth.identity import SimulatedIdentityProvider
from modules.auth.interfaces import IIdentityProvider
from modules.session.interfaces import ISessionStore
from modules.session.store import JsonFileSessionStore, MemorySessionStore


class TestAuthInterfaces:
    def test_identity_interface_methods_exist(self):
        """IIdentityProvider should define the remote auth operations."""
        methods = ["login", "login_with_google", "signup", "reset_password", "update_profile"]
        for method in methods:
            assert hasattr(IIdentityProvider, method)

    def test_simulated_provider_has_interface_methods(self):
        methods = ["login", "login_with_google", "signup", "reset_password", "update_profile"]
        for method in methods:
            assert callable(getattr(SimulatedIdentityProvider, method))

    def test_session_stores_satisfy_interface(self, tmp_path):
        """Both stores should satisfy the runtime-checkable ISessionStore."""
        assert isinstance(MemorySessionStore(), ISessionStore)
        assert isinstance(JsonFileSessionStore(tmp_path), ISessionStore)

    def test_auth_context_exposes_operations(self):
        """AuthContext should expose the six session operations."""
        methods = [
            "login",
            "login_with_google",
            "signup",
            "logout",
            "reset_password",
            "update_profile",
        ]
        for method in methods:
            assert callable(getattr(AuthContext, method))
