"""
User onboarding flow.

Classifies a wallet into one of the onboarding states and decides which
route the frontend guard should send it to.

Flow:
    no-wallet -> not-registered -> registered -> activated -> profile-complete
"""

from dataclasses import asdict, dataclass
from enum import Enum

from app.services.blockchain.types import UserInfo


class UserFlowState(str, Enum):
    """Onboarding state of a wallet."""

    NO_WALLET = "no-wallet"
    NOT_REGISTERED = "not-registered"
    REGISTERED = "registered"
    ACTIVATED = "activated"
    PROFILE_COMPLETE = "profile-complete"
    LOADING = "loading"


NEXT_STEP: dict[UserFlowState, str] = {
    UserFlowState.NO_WALLET: "/wallet",
    UserFlowState.NOT_REGISTERED: "/register",
    UserFlowState.REGISTERED: "/activate",
    UserFlowState.ACTIVATED: "/profile?setup=true",
    UserFlowState.PROFILE_COMPLETE: "/",
}

FLOW_PROGRESS: dict[UserFlowState, int] = {
    UserFlowState.NO_WALLET: 0,
    UserFlowState.NOT_REGISTERED: 25,
    UserFlowState.REGISTERED: 50,
    UserFlowState.ACTIVATED: 75,
    UserFlowState.PROFILE_COMPLETE: 100,
}

PUBLIC_ROUTES = frozenset({"/wallet", "/register"})
WALLET_REQUIRED_ROUTES = frozenset({"/register", "/profile", "/share"})
REGISTRATION_REQUIRED_ROUTES = frozenset(
    {"/", "/income", "/referrals", "/transactions", "/profile", "/share"}
)


@dataclass(frozen=True)
class FlowMessage:
    title: str
    message: str
    action: str
    action_link: str

    def to_dict(self) -> dict[str, str]:
        data = asdict(self)
        data["actionLink"] = data.pop("action_link")
        return data


FLOW_MESSAGES: dict[UserFlowState, FlowMessage] = {
    UserFlowState.NO_WALLET: FlowMessage(
        "Connect Your Wallet",
        "To get started with USDT Rain, you need to connect your Web3 wallet.",
        "Connect Wallet",
        "/wallet",
    ),
    UserFlowState.NOT_REGISTERED: FlowMessage(
        "Register Your Account",
        "You need to register with a sponsor referral code to join USDT Rain.",
        "Register Now",
        "/register",
    ),
    UserFlowState.REGISTERED: FlowMessage(
        "Activate Your Account",
        "Deposit 25 USDT to activate your account and continue setup.",
        "Activate Now",
        "/activate",
    ),
    UserFlowState.ACTIVATED: FlowMessage(
        "Complete Your Profile",
        "Add your username and contact number to finish setup.",
        "Update Profile",
        "/profile?setup=true",
    ),
    UserFlowState.PROFILE_COMPLETE: FlowMessage(
        "Welcome Back!",
        "Your account is fully set up. Start earning by sharing your referral link.",
        "View Dashboard",
        "/",
    ),
}

LOADING_MESSAGE = FlowMessage(
    "Loading...",
    "Please wait while we load your account information.",
    "Please Wait",
    "/",
)


def classify_user_flow(
    wallet_connected: bool,
    user_id: int | None,
    has_profile: bool,
    is_active: bool,
) -> UserFlowState:
    """
    Map the wallet's on-chain facts to an onboarding state.

    Checks run in flow order, so an inactive user with a profile is still
    ``registered``.

    Examples:
        >>> classify_user_flow(False, 7, True, True)
        <UserFlowState.NO_WALLET: 'no-wallet'>
        >>> classify_user_flow(True, 7, False, True)
        <UserFlowState.ACTIVATED: 'activated'>
    """
    if not wallet_connected:
        return UserFlowState.NO_WALLET
    if not user_id:
        return UserFlowState.NOT_REGISTERED
    if not is_active:
        return UserFlowState.REGISTERED
    if not has_profile:
        return UserFlowState.ACTIVATED
    return UserFlowState.PROFILE_COMPLETE


def classify_user_info(address: str | None, user_info: UserInfo | None) -> UserFlowState:
    """Classify from a wallet address and its decoded getUserInfo()."""
    if user_info is None:
        return classify_user_flow(bool(address), None, False, False)
    return classify_user_flow(
        wallet_connected=bool(address),
        user_id=user_info.user_id,
        has_profile=user_info.has_profile,
        is_active=user_info.is_activated,
    )


def next_step(state: UserFlowState) -> str:
    """Route a wallet in ``state`` should be sent to."""
    return NEXT_STEP.get(state, "/")


def can_access_route(state: UserFlowState, route: str) -> bool:
    """
    Whether a wallet in ``state`` may open ``route``.

    Registered-but-inactive users can reach every non-gated route.
    """
    if route in PUBLIC_ROUTES:
        return True
    if route in WALLET_REQUIRED_ROUTES and state == UserFlowState.NO_WALLET:
        return False
    if route in REGISTRATION_REQUIRED_ROUTES and state == UserFlowState.NOT_REGISTERED:
        return False
    return True


def resolve_redirect(
    state: UserFlowState,
    pathname: str,
    allowed_states: set[UserFlowState] | None = None,
) -> str | None:
    """
    Route guard decision.

    Args:
        state: Current onboarding state
        pathname: Route being opened
        allowed_states: If given, only these states may stay on the page

    Returns:
        Route to redirect to, or None to stay
    """
    if state == UserFlowState.LOADING:
        return None

    target = next_step(state)
    if allowed_states is not None:
        if state not in allowed_states and pathname != target:
            return target
        return None

    if not can_access_route(state, pathname):
        return target
    return None


def flow_progress(state: UserFlowState) -> int:
    return FLOW_PROGRESS.get(state, 0)


def flow_message(state: UserFlowState) -> FlowMessage:
    return FLOW_MESSAGES.get(state, LOADING_MESSAGE)


def describe_user_flow(address: str, user_info: UserInfo | None) -> dict:
    """JSON payload for the user-flow endpoint."""
    state = classify_user_info(address, user_info)
    return {
        "address": address,
        "state": state.value,
        "nextStep": next_step(state),
        "progress": flow_progress(state),
        "message": flow_message(state).to_dict(),
    }
