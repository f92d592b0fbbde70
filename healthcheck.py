#!/usr/bin/env python3
"""Health check script for Cedi Rates Watcher container."""

import sys
import time
from typing import Optional

from cedi_rates_watcher.config import Config
from cedi_rates_watcher.state_manager import RedisRateStore, create_redis_client


def check_redis_connection(config: Config) -> bool:
    """Check if Redis connection is working."""
    try:
        create_redis_client(config).ping()
        return True
    except Exception as e:
        print(f"Redis health check failed: {e}", file=sys.stderr)
        return False


def check_last_run_time(config: Config, store: Optional[RedisRateStore] = None) -> bool:
    """Check if a rate check completed within the allowed window."""
    try:
        store = store or RedisRateStore(config, client=create_redis_client(config))
        last_run = store.last_run()

        # No run recorded yet (first start), consider it healthy
        if last_run is None:
            print("No previous rate check found (first run), considering healthy", file=sys.stderr)
            return True

        time_diff = time.time() - last_run
        max_age = config.healthcheck_max_age

        if time_diff > max_age:
            print(f"❌ Last rate check was {time_diff:.0f} seconds ago (> {max_age} seconds)", file=sys.stderr)
            return False

        print(f"✅ Last rate check was {time_diff:.0f} seconds ago", file=sys.stderr)
        return True

    except Exception as e:
        print(f"Error checking last run time: {e}", file=sys.stderr)
        return False


def main() -> None:
    """Run health checks."""
    config = Config.from_env()
    checks = []

    redis_ok = check_redis_connection(config)
    checks.append(("redis", redis_ok))

    last_run_ok = check_last_run_time(config) if redis_ok else False
    checks.append(("last_run_time", last_run_ok))

    all_passed = all(result for _, result in checks)

    if all_passed:
        print("✅ Health check passed")
        sys.exit(0)
    else:
        failed_checks = [name for name, result in checks if not result]
        print(f"❌ Health check failed: {', '.join(failed_checks)}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
