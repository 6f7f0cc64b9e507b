#!/usr/bin/env python3
"""
EA Auth - keeps EA account sessions alive and performs connect/auth requests.

Main entry point for the application.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from ea_auth.core.config import get_settings
from ea_auth.core.exceptions import ConfigurationError, EAAuthError
from ea_auth.core.logger import setup_structured_logging
from ea_auth.repositories import AccountFileRepository
from ea_auth.services.ea import AccountRegistry, EASessionClient

EXIT_AUTH_ERROR = 1
EXIT_CONFIG_ERROR = 2


def parse_params(pairs: Optional[List[str]]) -> Dict[str, str]:
    """
    Turn repeated ``key=value`` arguments into a query mapping.

    Raises:
        argparse.ArgumentTypeError: If an item has no '='
    """
    params: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Expected key=value, got '{pair}'")
        params[key] = value
    return params


async def run(accounts_file: Path, params: Dict[str, str], persona: Optional[str]) -> str:
    """
    Load accounts, bootstrap unresolved ones and perform one authorization.

    Args:
        accounts_file: YAML account list
        params: connect/auth query parameters
        persona: Persona id to use (default account when None)

    Returns:
        Raw authorization result
    """
    settings = get_settings()
    repository = AccountFileRepository(accounts_file)
    registry = AccountRegistry(repository.load())

    async with EASessionClient(
        registry, persist=repository.save, timeout=settings.request_timeout
    ) as client:
        await client.start()
        if not params:
            logger.info("No --param given, startup only")
            return ""
        return await client.authorize(params, persona)


def main() -> None:
    """Main entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="EA Auth - connect/auth session keeper")
    parser.add_argument(
        "--accounts-file",
        type=Path,
        default=settings.accounts_file,
        help="Path to the accounts YAML file",
    )
    parser.add_argument("--persona", default=None, help="Persona id (default: first account)")
    parser.add_argument(
        "--param",
        action="append",
        metavar="KEY=VALUE",
        help="connect/auth query parameter, repeatable (e.g. client_id=ORIGIN_JS_SDK)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    args = parser.parse_args()

    setup_structured_logging(
        args.log_level, json_format=settings.log_json, diagnose=settings.is_development
    )

    try:
        params = parse_params(args.param)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    try:
        result = asyncio.run(run(args.accounts_file, params, args.persona))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(EXIT_CONFIG_ERROR)
    except EAAuthError as e:
        logger.error(f"Authorization failed: {e.to_dict()}")
        sys.exit(EXIT_AUTH_ERROR)

    if result:
        print(result)


if __name__ == "__main__":
    main()
