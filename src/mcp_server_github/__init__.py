import asyncio
import logging
import os
import sys
from datetime import datetime
from pathlib import Path

import click

from .config import ServerConfig
from .credentials import resolve_credential
from .logging_config import configure_logging
from .server import serve

__version__ = "1.0.0"


@click.command()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v INFO, -vv DEBUG)")
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Load environment variables from this .env file",
)
@click.option(
    "--enable-file-logging",
    is_flag=True,
    help="Enable logging to file in logs/ directory",
)
@click.option("--plain-logs", is_flag=True, help="Human-readable logs instead of JSON lines")
def main(verbose: int, env_file: Path | None, enable_file_logging: bool, plain_logs: bool) -> None:
    """GitHub MCP Server - git and GitHub repository tools for MCP"""
    if env_file:
        from dotenv import load_dotenv

        load_dotenv(env_file, override=False)

    log_level = None
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"

    log_file = None
    if enable_file_logging:
        session_id = os.environ.get("MCP_SESSION_ID", datetime.now().strftime("%Y%m%d_%H%M%S"))
        log_file = Path.cwd() / "logs" / f"mcp_github_debug-{session_id}.log"

    try:
        config = ServerConfig.from_env(
            log_level=log_level,
            structured_logs=False if plain_logs else None,
            log_file=log_file,
        )
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    configure_logging(config.log_level, structured=config.structured_logs, log_file=config.log_file)
    credential = resolve_credential(token_file_name=config.token_file_name)
    if credential.token:
        # Reconfigure now that we know which secret to scrub from the logs
        configure_logging(
            config.log_level,
            secrets=[credential.token],
            structured=config.structured_logs,
            log_file=config.log_file,
        )
    if log_file:
        logging.getLogger(__name__).info(f"📝 File logging enabled: {log_file}")

    try:
        asyncio.run(serve(config, credential))
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("⌨️ Server interrupted by user")
    except Exception as e:
        logging.getLogger(__name__).critical(f"Error in MCP server: {e}", exc_info=True)
        print(f"Error in MCP server: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
