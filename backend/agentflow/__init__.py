# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
AgentFlow backend: natural-language and visual workflow builder for AI agents.
"""

__version__ = "0.1.0"
