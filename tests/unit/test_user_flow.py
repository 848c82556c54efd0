"""Unit tests for the user onboarding flow classifier and route guard."""

import pytest

from app.services.user_flow import (
    UserFlowState,
    can_access_route,
    classify_user_flow,
    classify_user_info,
    describe_user_flow,
    flow_message,
    flow_progress,
    next_step,
    resolve_redirect,
)


class TestClassifyUserFlow:
    """Tests for classify_user_flow."""

    def test_no_wallet_wins_over_everything(self):
        assert classify_user_flow(False, 7, True, True) == UserFlowState.NO_WALLET

    @pytest.mark.parametrize("user_id", [None, 0])
    def test_missing_user_id_is_not_registered(self, user_id):
        assert classify_user_flow(True, user_id, True, True) == UserFlowState.NOT_REGISTERED

    def test_inactive_user_is_registered_even_with_profile(self):
        assert classify_user_flow(True, 7, True, False) == UserFlowState.REGISTERED

    def test_active_without_profile_is_activated(self):
        assert classify_user_flow(True, 7, False, True) == UserFlowState.ACTIVATED

    def test_active_with_profile_is_complete(self):
        assert classify_user_flow(True, 7, True, True) == UserFlowState.PROFILE_COMPLETE

    def test_classifier_never_returns_loading(self):
        states = {
            classify_user_flow(w, u, p, a)
            for w in (True, False)
            for u in (None, 0, 1)
            for p in (True, False)
            for a in (True, False)
        }
        assert UserFlowState.LOADING not in states


class TestClassifyUserInfo:
    """Tests for classification from on-chain user info."""

    def test_activation_needs_timestamp(self, user_info_factory):
        info = user_info_factory(is_active=True, activation_timestamp=0)
        assert classify_user_info("0xabc", info) == UserFlowState.REGISTERED

    def test_profile_needs_name_and_contact(self, user_info_factory):
        info = user_info_factory(contact_number="")
        assert classify_user_info("0xabc", info) == UserFlowState.ACTIVATED

    def test_unregistered_user(self, user_info_factory):
        info = user_info_factory(user_id=0)
        assert classify_user_info("0xabc", info) == UserFlowState.NOT_REGISTERED

    def test_missing_info_with_address(self):
        assert classify_user_info("0xabc", None) == UserFlowState.NOT_REGISTERED

    def test_missing_address(self, user_info_factory):
        assert classify_user_info(None, user_info_factory()) == UserFlowState.NO_WALLET


class TestRoutes:
    """Tests for next step, route access and redirects."""

    @pytest.mark.parametrize(
        ("state", "route"),
        [
            (UserFlowState.NO_WALLET, "/wallet"),
            (UserFlowState.NOT_REGISTERED, "/register"),
            (UserFlowState.REGISTERED, "/activate"),
            (UserFlowState.ACTIVATED, "/profile?setup=true"),
            (UserFlowState.PROFILE_COMPLETE, "/"),
            (UserFlowState.LOADING, "/"),
        ],
    )
    def test_next_step(self, state, route):
        assert next_step(state) == route

    def test_public_routes_always_accessible(self):
        for state in UserFlowState:
            assert can_access_route(state, "/wallet")
            assert can_access_route(state, "/register")

    def test_wallet_required_routes_blocked_without_wallet(self):
        assert not can_access_route(UserFlowState.NO_WALLET, "/share")
        assert not can_access_route(UserFlowState.NO_WALLET, "/profile")

    def test_registration_required_routes_blocked_for_unregistered(self):
        for route in ("/", "/income", "/referrals", "/transactions", "/profile", "/share"):
            assert not can_access_route(UserFlowState.NOT_REGISTERED, route)

    def test_registered_inactive_user_can_open_dashboard(self):
        assert can_access_route(UserFlowState.REGISTERED, "/income")

    def test_redirect_unregistered_from_dashboard(self):
        assert resolve_redirect(UserFlowState.NOT_REGISTERED, "/income") == "/register"

    def test_no_redirect_when_allowed(self):
        assert resolve_redirect(UserFlowState.PROFILE_COMPLETE, "/income") is None

    def test_no_redirect_while_loading(self):
        assert resolve_redirect(UserFlowState.LOADING, "/income") is None

    def test_allowed_states_restricts_page(self):
        allowed = {UserFlowState.REGISTERED}
        assert resolve_redirect(UserFlowState.ACTIVATED, "/activate", allowed) == (
            "/profile?setup=true"
        )
        assert resolve_redirect(UserFlowState.REGISTERED, "/activate", allowed) is None

    def test_allowed_states_no_loop_on_target(self):
        allowed = {UserFlowState.PROFILE_COMPLETE}
        assert resolve_redirect(UserFlowState.REGISTERED, "/activate", allowed) is None


class TestFlowPresentation:
    """Tests for progress, messages and the endpoint payload."""

    def test_progress_steps(self):
        assert [flow_progress(s) for s in list(UserFlowState)[:5]] == [0, 25, 50, 75, 100]
        assert flow_progress(UserFlowState.LOADING) == 0

    def test_loading_message(self):
        assert flow_message(UserFlowState.LOADING).title == "Loading..."

    def test_describe_user_flow(self, user_info_factory):
        payload = describe_user_flow("0xabc", user_info_factory(user_name=""))

        assert payload["state"] == "activated"
        assert payload["nextStep"] == "/profile?setup=true"
        assert payload["progress"] == 75
        assert payload["message"]["actionLink"] == "/profile?setup=true"
        assert payload["message"]["action"] == "Update Profile"

    def test_registered_message_names_activation_deposit(self):
        message = flow_message(UserFlowState.REGISTERED)

        assert message.title == "Activate Your Account"
        assert message.message == (
            "Deposit 25 USDT to activate your account and continue setup."
        )
        assert message.action_link == "/activate"
