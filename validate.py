#!/usr/bin/env python3
"""Validation script to check if all imports work correctly."""

import sys

def validate_imports():
    """Test that all modules can be imported."""
    print("Validating imports...")

    errors = []

    # Test main server
    try:
        from forgejo_mcp import server
        print("✓ Main server module")
    except Exception as e:
        errors.append(f"✗ Main server: {e}")

    # Test config
    try:
        from forgejo_mcp import config
        print("✓ Config module")
    except Exception as e:
        errors.append(f"✗ Config: {e}")

    # Test forge client modules
    try:
        from forgejo_mcp.remote import detection, factory, forgejo, gitea, http, interface, models
        print("✓ Remote client modules")
    except Exception as e:
        errors.append(f"✗ Remote client modules: {e}")

    # Test tool handlers
    try:
        from forgejo_mcp.tools import base, inputs, issues, notifications, pulls, registry, responses
        print("✓ Tool handler modules")
    except Exception as e:
        errors.append(f"✗ Tool handlers: {e}")

    # Test utilities
    try:
        from forgejo_mcp.utils import errors as error_types, logging_config, redact, validation
        print("✓ Utility modules")
    except Exception as e:
        errors.append(f"✗ Utilities: {e}")

    # Test Pydantic models
    try:
        from forgejo_mcp.tools.inputs import (
            IssueCommentCreateInput,
            PullRequestEditInput,
            PullRequestListInput
        )
        print("✓ Pydantic models")
    except Exception as e:
        errors.append(f"✗ Pydantic models: {e}")

    # Test tool table
    try:
        from forgejo_mcp.tools.registry import TOOL_HANDLERS
        print(f"✓ Tool table ({len(TOOL_HANDLERS)} tools)")
    except Exception as e:
        errors.append(f"✗ Tool table: {e}")

    if errors:
        print("\n❌ Validation failed with errors:")
        for error in errors:
            print(f"  {error}")
        return False
    else:
        print("\n✅ All validations passed!")
        return True


def check_dependencies():
    """Check if required dependencies are installed."""
    print("\nChecking dependencies...")

    required = [
        "mcp",
        "httpx",
        "pydantic"
    ]

    missing = []

    for package in required:
        try:
            __import__(package)
            print(f"✓ {package}")
        except ImportError:
            missing.append(package)
            print(f"✗ {package} - NOT INSTALLED")

    if missing:
        print(f"\n❌ Missing packages: {', '.join(missing)}")
        print("Install with: pip install -e .")
        return False
    else:
        print("\n✅ All dependencies installed!")
        return True


def main():
    """Run all validations."""
    print("=" * 60)
    print("Forgejo MCP Server - Validation Script")
    print("=" * 60)

    deps_ok = check_dependencies()
    print()

    if deps_ok:
        imports_ok = validate_imports()

        if imports_ok:
            print("\n" + "=" * 60)
            print("🎉 Ready to use!")
            print("=" * 60)
            print("\nNext steps:")
            print("  1. Set FORGEJO_REMOTE_URL and FORGEJO_AUTH_TOKEN")
            print("  2. Run: forgejo-mcp (or python -m forgejo_mcp.server)")
            print("  3. Optionally set FORGEJO_CLIENT_TYPE, FORGEJO_LOG_FILE")
            return 0
        else:
            return 1
    else:
        return 1


if __name__ == "__main__":
    sys.exit(main())
