#!/usr/bin/env python3
"""Helper script to check and create the .env file for provider and Supabase configuration."""

from pathlib import Path
import os

ENV_TEMPLATE = """# Directions provider (required for route planning)
# Get a token from: https://account.mapbox.com/access-tokens/
ECO_MAPBOX_ACCESS_TOKEN=your-mapbox-token-here

# Weather provider (optional, used by /api/weather)
ECO_OPENWEATHER_API_KEY=your-openweathermap-key-here

# Supabase Configuration (optional - profiles are kept in memory without it)
# Get these from: https://supabase.com/dashboard → Your Project → Settings → API
ECO_SUPABASE_URL=https://your-project-id.supabase.co
ECO_SUPABASE_KEY=your-service-role-key-here

# API Configuration
ECO_API_PREFIX=/api
ECO_LOG_LEVEL=INFO
# ECO_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated list
# ECO_DIRECTIONS_DEADLINE_SECONDS=8
"""

SECRET_KEYS = ("ECO_MAPBOX_ACCESS_TOKEN", "ECO_OPENWEATHER_API_KEY", "ECO_SUPABASE_KEY")


def _mask(value: str) -> str:
    return value[:8] + "..." + value[-4:] if len(value) > 16 else value


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Eco Commute Planner Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"❌ .env file NOT found at: {env_file}")
        env_file.write_text(ENV_TEMPLATE, encoding="utf-8")
        print(f"✅ Created template .env file at: {env_file}")
        print("⚠️  Please edit .env and add your Mapbox token (and optionally Supabase credentials)!")
        return

    print(f"✅ Found .env file at: {env_file}")
    print("-" * 60)
    for line in env_file.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.partition("=")
        if sep and key.strip() in SECRET_KEYS:
            print(f"{key}={_mask(value.strip())}")
        else:
            print(line)
    print("-" * 60)
    print()

    for key in ("ECO_MAPBOX_ACCESS_TOKEN", "ECO_SUPABASE_URL", "ECO_SUPABASE_KEY"):
        if os.getenv(key):
            print(f"✅ {key} set in environment")
        else:
            print(f"ℹ️  {key} not set in environment (may still come from .env)")
    print()

    try:
        import sys
        sys.path.insert(0, str(project_root / "src"))
        from ecocommute.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    print("✅ Directions provider configured" if settings.mapbox_access_token else "❌ ECO_MAPBOX_ACCESS_TOKEN is missing")
    print("✅ Weather provider configured" if settings.openweather_api_key else "ℹ️  Weather provider not configured")
    if settings.supabase_url and settings.supabase_key:
        print("✅ Supabase is configured")
    else:
        print("ℹ️  Supabase is NOT configured - user profiles will be stored in memory")


if __name__ == "__main__":
    main()
