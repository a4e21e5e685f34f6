# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Setup configuration for the AgentFlow backend
"""

from setuptools import setup, find_packages

setup(
    name="agentflow",
    version="0.1.0",
    description="Natural-language and visual workflow builder for AI agents",
    package_dir={"": "backend"},
    packages=find_packages("backend", exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.110.0",
        "uvicorn>=0.27.0",
        "pydantic>=2.5.0",
        "PyYAML>=6.0",
        "python-dotenv>=1.0.0",
        "anthropic>=0.40.0",
        "openai>=1.30.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "httpx>=0.25.0",
        ]
    },
)
