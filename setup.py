#!/usr/bin/env python3
"""
Setup script for the Anyteam end-to-end suite.

Install with `pip install -e .` for the library and CLI, or
`pip install -e '.[dev]'` for the test tooling as well. Browsers are
installed separately with `playwright install chromium`.
"""

import sys

if sys.version_info < (3, 11):
    sys.exit("Error: anyteam-e2e requires Python 3.11 or higher.")

try:
    from setuptools import find_packages, setup
except ImportError:
    sys.exit("Error: setuptools is required. Install it with: pip install setuptools")

# Try to read version from __version__.py for consistency
try:
    import re
    from pathlib import Path

    version_file = Path(__file__).parent / "src" / "anyteam_e2e" / "__version__.py"
    version_content = version_file.read_text(encoding="utf-8")
    version_match = re.search(r'^__version__\s*=\s*["\']([^"\']+)["\']', version_content, re.M)
    version = version_match.group(1) if version_match else "0.1.0"
except OSError:
    version = "0.1.0"

# Read long description from README if available
try:
    from pathlib import Path

    readme_path = Path(__file__).parent / "README.md"
    if readme_path.exists():
        long_description = readme_path.read_text(encoding="utf-8")
        long_description_content_type = "text/markdown"
    else:
        long_description = "End-to-end UI suite for Anyteam"
        long_description_content_type = "text/plain"
except OSError:
    long_description = "End-to-end UI suite for Anyteam"
    long_description_content_type = "text/plain"

# Core dependencies
install_requires = [
    "playwright>=1.43.0",
    "pydantic>=2.5.0",
    "pydantic-settings>=2.1.0",
    "python-dotenv>=1.0.0",
]

# Development dependencies
extras_require = {
    "dev": [
        "pytest>=7.4.0",
        "black>=23.0.0",
        "flake8>=6.1.0",
        "mypy>=1.7.0",
        "pytest-cov>=4.1.0",
        "pytest-asyncio>=0.21.0",
    ],
}
extras_require["test"] = list(extras_require["dev"])

setup(
    name="anyteam-e2e",
    version=version,
    description="End-to-end UI suite for Anyteam with Google sign-in and Calendar flows",
    long_description=long_description,
    long_description_content_type=long_description_content_type,
    author="Anyteam QA",
    license="MIT",
    python_requires=">=3.11",
    packages=find_packages("src"),
    package_dir={"": "src"},
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "anyteam-e2e=anyteam_e2e.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Testing",
    ],
    keywords=["e2e", "playwright", "testing", "oauth", "calendar"],
)
