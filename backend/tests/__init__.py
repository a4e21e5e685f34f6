# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Test Suite for the AgentFlow Backend

Structure:
- workflow/: Node model, derivation, mutations and templates
- unit/: Store and service tests
- test_api.py, test_smoke.py: HTTP routes through TestClient
"""
