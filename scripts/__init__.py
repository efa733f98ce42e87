"""
Deployment Scripts
==================

Entry points for deploying the Ticketland package.

Structure:
- initialize: publish the package and run the initial update_config call
"""

__version__ = "1.0.0"
__author__ = "Ticketland Team"
