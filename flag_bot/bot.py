"""Main entry point for the flag quiz bot."""
import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import BotCommand

from flag_bot.config import settings
from flag_bot.handlers import quiz, start
from flag_bot.quiz.registry import close_all


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)


async def main():
    """Start polling until interrupted."""
    if not settings.BOT_TOKEN:
        logger.error("BOT_TOKEN is not set. Create a .env file based on .env.example")
        sys.exit(1)

    logger.info("Starting flag quiz bot...")

    bot = Bot(token=settings.BOT_TOKEN)
    dp = Dispatcher(storage=MemoryStorage())

    # /start must win over the free-text handler of a running quiz
    dp.include_router(start.router)
    dp.include_router(quiz.router)

    await bot.set_my_commands([
        BotCommand(command="start", description="New quiz"),
        BotCommand(command="score", description="Current score"),
    ])

    try:
        logger.info("Starting bot polling...")
        await dp.start_polling(
            bot,
            allowed_updates=dp.resolve_used_update_types()
        )
    except Exception as e:
        logger.error(f"Error during polling: {e}")
        raise
    finally:
        close_all()
        await bot.session.close()
        logger.info("Bot stopped")


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")


if __name__ == "__main__":
    run()
