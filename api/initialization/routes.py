"""
API Initialization - Routes Module.

Module: routes.py
Registers all HTTP routes under the API prefix and enables CORS for them.
"""

import aiohttp_cors
from aiohttp import web
from loguru import logger

from api.handlers import eligibility, global_pool, logs, system, user_flow
from app.config.settings import Settings


def register_routes(app: web.Application, settings: Settings) -> None:
    """
    Register all routes.

    Plain /logs/* routes are registered before /logs/{request_id} so they
    win the match.

    Args:
        app: Application instance
        settings: Application settings (API prefix)
    """
    prefix = settings.api_prefix
    router = app.router

    router.add_get("/", system.root)

    # System (no auth)
    router.add_get(f"{prefix}/health", system.health)
    router.add_get(f"{prefix}/status", system.status)

    router.add_get(f"{prefix}/stats", system.contract_stats)

    # Eligible users
    router.add_get(f"{prefix}/eligible-users", eligibility.list_eligible_users)
    router.add_get(
        f"{prefix}/eligible-users/check/{{address}}", eligibility.check_eligibility
    )
    router.add_post(f"{prefix}/eligible-users/add", eligibility.add_eligible_user)
    router.add_post(f"{prefix}/eligible-users/remove", eligibility.remove_eligible_user)
    router.add_post(f"{prefix}/eligibility/request", eligibility.request_eligibility)

    # Global pool
    router.add_get(f"{prefix}/global-pool/stats", global_pool.global_pool_stats)
    router.add_post(f"{prefix}/global-pool/distribute", global_pool.distribute_global_pool)

    # Request logs
    router.add_get(f"{prefix}/logs/recent", logs.recent_logs)
    router.add_get(f"{prefix}/logs/failed", logs.failed_logs)
    router.add_get(f"{prefix}/logs/stats", logs.log_stats)
    router.add_get(f"{prefix}/logs/endpoint/{{endpoint}}", logs.logs_by_endpoint)
    router.add_get(f"{prefix}/logs/{{request_id}}", logs.log_by_id)

    # User flow
    router.add_get(f"{prefix}/user-flow/{{address}}", user_flow.user_flow)

    logger.info(f"Routes registered under {prefix}")


def setup_cors(app: web.Application, settings: Settings) -> None:
    """Allow the configured frontend origin, with credentials, on every route."""
    cors = aiohttp_cors.setup(
        app,
        defaults={
            settings.cors_origin: aiohttp_cors.ResourceOptions(
                allow_credentials=True,
                expose_headers="*",
                allow_headers="*",
            )
        },
    )
    for route in list(app.router.routes()):
        cors.add(route)
