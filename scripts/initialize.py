#!/usr/bin/env python3
"""
Ticketland initial deployment

Publishes the event_registry package to Sui and configures the registry.
Run once per network deployment; a second run publishes a second package.
"""

import os
import logging

from deployer.build import SuiBuildInvoker
from deployer.client import SuiClient
from deployer.config import load_config
from deployer.orchestrator import Deployer
from deployer.signer import SigningIdentity

logger = logging.getLogger(__name__)


def configure_logging():
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler('deploy.log'),
            logging.StreamHandler()
        ]
    )


def main():
    """Build, publish and configure the Ticketland package"""
    configure_logging()

    try:
        config = load_config()
        signer = SigningIdentity.from_hex(config.private_key, rpc_url=config.rpc_url)
        client = SuiClient.connect(signer, gas_budget=config.gas_budget)
        deployer = Deployer(
            build_invoker=SuiBuildInvoker(config.sui_cli),
            client=client,
            signer=signer,
            package_path=config.package_path,
            supported_coins=config.supported_coins,
        )
        report = deployer.run()
        logger.info(f"Deployment finished, config digest: {report.config_digest}")
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise


if __name__ == "__main__":
    main()
