"""setuptools setup for FocusDesk.

Install for development:
    pip install -e ".[test]"

Then run:
    focusdesk            # desktop window
    focusdesk serve      # REST API on 127.0.0.1:3000
"""

from setuptools import setup, find_packages

setup(
    name="FocusDesk",
    version="0.1.0",
    description="Personal productivity dashboard: tasks, lectures, focus timer, AI assistant",
    packages=find_packages(include=["focusdesk", "focusdesk.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.5",
        "SQLAlchemy>=2.0",
        "Flask>=2.2",
        "google-genai>=1.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["focusdesk=focusdesk.__main__:main"],
    },
)
