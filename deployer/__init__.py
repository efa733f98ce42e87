"""
Ticketland Package Deployer
===========================

Publishes the Ticketland Move package to Sui and runs the one-time
configuration call on the freshly created registry objects.

Modules:
- build: Move compiler invocation
- signer: Ed25519 signing identity
- transactions: programmable transaction building
- client: submission through the pysui SDK
- resolver: extraction of created object ids from a publish result
- orchestrator: the build -> publish -> resolve -> configure workflow
"""

__version__ = "1.0.0"
__author__ = "Ticketland Team"
