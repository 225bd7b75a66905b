# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
PLAYTOOLS - rewards sweepstake tooling over AWS SSO and Lambda.

A Python CLI tool that drives the sweepstake rewards calculator Lambda from an
interactive terminal menu. Handles AWS SSO session checks and re-login,
synchronous Lambda invocation with inline log tails, and rendering of the raw
response and logs.
"""

__version__ = "0.3.0"
