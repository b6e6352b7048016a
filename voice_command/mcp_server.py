#!/usr/bin/env python3
"""
MCP server for the voice command interpreter.

Exposes `voice_command(text="...")` for interpreting utterances, plus the
smart-speaker content tools (`latest_post`, `page`, `product`), which
answer with a delivery_disabled error unless
VOICE_COMMAND_SMART_SPEAKER_ENABLED=true.

Port: 8891 (configurable via VOICE_COMMAND_MCP_PORT)
Transport: SSE
"""

import logging
import sys
from typing import Any, Dict

from fastmcp import FastMCP

from voice_command import VoiceCommandInterpreter
from voice_command.exceptions import ContentDeliveryError, ContentLookupUnavailable

logger = logging.getLogger("fastmcp-voice-command")

mcp = FastMCP(name="voice-command-interpreter")

interpreter = VoiceCommandInterpreter()
settings = interpreter.settings


def _delivery_error(e: ContentDeliveryError) -> Dict[str, Any]:
    return {"code": e.code, "message": e.message, "data": {"status": e.status_code}}


@mcp.tool()
async def voice_command(text: str) -> Dict[str, Any]:
    """
    Interpret a spoken command transcribed to text.

    Args:
        text: The utterance, e.g. "go to About", "search for vegan recipes",
            "read latest post".

    Returns:
        The action to perform (navigate/search/read/none), its url or
        title/content, and a message suitable for speech output.
    """
    logger.info(f"Tool called: voice_command(text='{text[:80]}')")
    try:
        result = await interpreter.process(text)
    except ContentLookupUnavailable as e:
        logger.error(f"Content store unavailable: {e}")
        return {"success": False, "action": "none", "message": "The site is not reachable right now.", "status": 503}
    return result.model_dump(mode="json", exclude_none=True)


@mcp.tool()
async def latest_post() -> Dict[str, Any]:
    """Title and speech-ready content of the most recent post."""
    try:
        return (await interpreter.delivery.latest_post()).model_dump()
    except ContentDeliveryError as e:
        return _delivery_error(e)


@mcp.tool()
async def page(slug: str) -> Dict[str, Any]:
    """Title and speech-ready content of a published page."""
    try:
        return (await interpreter.delivery.page(slug)).model_dump()
    except ContentDeliveryError as e:
        return _delivery_error(e)


@mcp.tool()
async def product(slug: str) -> Dict[str, Any]:
    """Title and speech-ready description of a published product."""
    try:
        return (await interpreter.delivery.product(slug)).model_dump()
    except ContentDeliveryError as e:
        return _delivery_error(e)


@mcp.tool()
async def analytics_summary() -> Dict[str, Any]:
    """Top commands and engagement metrics for tracked voice commands."""
    interpreter.analytics.cleanup_old_data()
    return interpreter.analytics.summary()


def main():
    """Main entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not settings.mcp_enabled:
        logger.warning("=" * 60)
        logger.warning("Voice Command MCP Server is DISABLED")
        logger.warning("To enable: export VOICE_COMMAND_MCP_ENABLED=true")
        logger.warning("=" * 60)
        sys.exit(0)

    logger.info("=" * 60)
    logger.info("Starting FastMCP Voice Command Server")
    logger.info(f"Host: {settings.mcp_host}")
    logger.info(f"Port: {settings.mcp_port}")
    logger.info(f"Site: {settings.site_url}")
    logger.info(f"Smart speaker tools: {'on' if settings.smart_speaker_enabled else 'off'}")
    logger.info(f"Analytics: {'on' if settings.analytics_enabled else 'off'}")
    logger.info("=" * 60)

    mcp.run(transport="sse", host=settings.mcp_host, port=settings.mcp_port)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
