"""Main application entry point."""
import asyncio
import logging
import signal
import sys
from typing import Optional

from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    MessageHandler,
    filters,
)

from wordscramble.config import settings
from wordscramble.models.base import init_db
from wordscramble.monitoring import start_monitoring
from wordscramble.bot import (
    handle_start,
    handle_callback,
    handle_message,
    handle_error,
    show_statistics,
)


class ScrambleBot:
    """Main application class."""

    def __init__(self):
        """Initialize the application."""
        self.application: Optional[Application] = None
        self.running = False
        self.logger = logging.getLogger(__name__)

    def build_application(self) -> Application:
        """Create the Telegram application and register handlers."""
        if not settings.bot.token:
            raise ValueError("TELEGRAM_BOT_TOKEN is required")

        # Handlers must run concurrently so input during the pause between words can be rejected
        application = Application.builder().token(settings.bot.token).concurrent_updates(True).build()

        application.add_handler(CommandHandler("start", handle_start))
        application.add_handler(CommandHandler("stats", show_statistics))
        application.add_handler(CallbackQueryHandler(handle_callback))
        application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))
        application.add_error_handler(handle_error)
        return application

    async def start(self) -> None:
        """Start the application."""
        if self.running:
            return

        try:
            init_db()
            self.logger.info("Database initialized")

            self.application = self.build_application()
            self.logger.info("Application created")

            if settings.monitoring.enabled:
                start_monitoring(settings.monitoring.port)
                self.logger.info(f"Metrics exported on port {settings.monitoring.port}")

            await self.application.initialize()
            await self.application.start()
            await self.application.updater.start_polling()
            self.logger.info("Application started")

            self.running = True

        except Exception as e:
            self.logger.error("Failed to start application: %s", str(e))
            await self.stop()
            raise

    async def stop(self) -> None:
        """Stop the application."""
        if self.application is None:
            self.running = False
            return

        try:
            await self.application.updater.stop()
            await self.application.stop()
            await self.application.shutdown()
            self.logger.info("Application stopped")
        finally:
            self.application = None
            self.running = False

    def run(self) -> None:
        """Run the application until interrupted."""
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)

        def signal_handler(signum, frame):
            """Handle signals like SIGINT (Ctrl+C)."""
            print()  # Print a newline to ensure log messages start on a new line
            self.logger.info(f"Received signal {signum}. Shutting down...")
            # Trainings are saved after every input, nothing to flush here
            sys.exit(0)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        try:
            loop.run_until_complete(self.start())
            loop.run_forever()
        except KeyboardInterrupt:
            self.logger.info("Received keyboard interrupt")
        finally:
            loop.run_until_complete(self.stop())
            loop.close()
