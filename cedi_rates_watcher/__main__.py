"""Allow ``python -m cedi_rates_watcher`` from cron or a container entrypoint."""

from .cli import main

main(prog_name="cedi-rates-watcher")
