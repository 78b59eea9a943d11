import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List

from fastapi import FastAPI
from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

from . import messages
from .addresses import extract_addresses, is_valid_address
from .config import BotConfig
from .exceptions import BatchTooLargeError, ConfigurationError
from .rpc import JsonRpcAllocationTransport, build_session
from .service import AllocationChecker, ensure_batch_size

# --- Standard Configuration ---
logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - %(message)s', level=logging.INFO)
logger = logging.getLogger(__name__)

# Free text shorter than this without addresses is ignored silently
MIN_HELP_TEXT_LENGTH = 10


def _checker(context: ContextTypes.DEFAULT_TYPE) -> AllocationChecker:
    return context.bot_data['checker']


def _config(context: ContextTypes.DEFAULT_TYPE) -> BotConfig:
    return context.bot_data['config']


# --- Flows ---

async def handle_allocation_check(update: Update, context: ContextTypes.DEFAULT_TYPE, address: str):
    """Single-address flow: validate, show a checking message, edit it into the result"""
    config = _config(context)

    if not is_valid_address(address):
        await update.message.reply_text(messages.render_invalid_address(address), parse_mode='Markdown')
        return

    address = address.strip()
    status_message = await update.message.reply_text(messages.get_random_phrase('checking'))

    try:
        result = await _checker(context).check_single(address)
        await status_message.edit_text(
            messages.render_single_result(address, result, config),
            parse_mode='Markdown',
            disable_web_page_preview=True
        )
    except Exception as e:
        logger.error(f"Error in handle_allocation_check for {address}: {e}", exc_info=True)
        await status_message.edit_text(messages.render_unexpected_error(e), parse_mode='Markdown')


async def handle_batch_check(update: Update, context: ContextTypes.DEFAULT_TYPE, addresses: List[str]):
    """Multi-address flow; the size limit is enforced before any query"""
    config = _config(context)

    try:
        ensure_batch_size(addresses, config.max_batch_size)
    except BatchTooLargeError as e:
        await update.message.reply_text(messages.render_too_many(e.count, e.limit), parse_mode='Markdown')
        return

    status_message = await update.message.reply_text(messages.render_batch_start(len(addresses)), parse_mode='Markdown')
    start_time = asyncio.get_running_loop().time()

    try:
        report = await _checker(context).check_batch(addresses)
        await status_message.edit_text(
            messages.render_batch_report(report, config),
            parse_mode='Markdown',
            disable_web_page_preview=True
        )
        execution_time = asyncio.get_running_loop().time() - start_time
        logger.info(f"Completed batch of {report.total} addresses in {execution_time:.1f}s. "
                    f"Found {report.found} allocations. User: {update.effective_user.id if update.effective_user else '-'}")
    except Exception as e:
        logger.error(f"Error in handle_batch_check: {e}", exc_info=True)
        await status_message.edit_text(messages.render_unexpected_error(e), parse_mode='Markdown')


# --- Command Handlers ---

async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await update.message.reply_text(messages.render_welcome(_config(context)), parse_mode='Markdown')


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await update.message.reply_text(messages.render_help(_config(context)), parse_mode='Markdown')


async def check_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    args = [arg.strip() for arg in (context.args or []) if arg.strip()]
    if not args:
        await update.message.reply_text("Usage: `/check <address>`", parse_mode='Markdown')
        return

    if len(args) == 1:
        await handle_allocation_check(update, context, args[0])
        return

    invalid = [arg for arg in args if not is_valid_address(arg)]
    if invalid:
        await update.message.reply_text(messages.render_invalid_address(invalid[0]), parse_mode='Markdown')
        return

    # Explicit lists are not deduplicated up front so repeats show up in the report
    await handle_batch_check(update, context, args)


async def health_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Show RPC reachability and latency"""
    config = _config(context)
    transport = context.bot_data['transport']
    start_time = asyncio.get_running_loop().time()

    try:
        block_number = await transport.get_block_number()
        latency = asyncio.get_running_loop().time() - start_time
        text = messages.render_health(block_number, latency, config)
    except Exception as e:
        latency = asyncio.get_running_loop().time() - start_time
        logger.warning(f"Health check failed: {e}")
        text = messages.render_health(None, latency, config, error=str(e))

    await update.message.reply_text(text, parse_mode='Markdown')


async def address_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Free-text messages: find addresses and route to the single or batch flow"""
    text = update.message.text or ''
    addresses = extract_addresses(text)

    if len(addresses) == 1:
        await handle_allocation_check(update, context, addresses[0])
    elif len(addresses) > 1:
        await handle_batch_check(update, context, addresses)
    elif len(text) > MIN_HELP_TEXT_LENGTH:
        await update.message.reply_text(messages.render_no_addresses(), parse_mode='Markdown')


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE):
    logger.error(f"Update {update} caused error: {context.error}", exc_info=context.error)


def build_application(config: BotConfig, checker: AllocationChecker, transport: JsonRpcAllocationTransport) -> Application:
    application = Application.builder().token(config.telegram_token).build()
    application.bot_data['config'] = config
    application.bot_data['checker'] = checker
    application.bot_data['transport'] = transport

    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(CommandHandler("check", check_command))
    application.add_handler(CommandHandler("health", health_command))
    application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, address_message))
    application.add_error_handler(error_handler)
    return application


# --- Lifespan Manager & Web Server Setup ---
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    try:
        config = BotConfig.from_environment()
    except ConfigurationError as e:
        logger.critical(f"CRITICAL: invalid configuration: {e}")
        raise

    if not config.telegram_token:
        logger.critical("CRITICAL: TELEGRAM_BOT_TOKEN not set.")
        yield
        return

    session = build_session(config)
    initialized = started = polling = False

    try:
        transport = JsonRpcAllocationTransport(session, config.rpc_url, config.contract_address)
        checker = AllocationChecker.from_config(transport, config)

        application = build_application(config, checker, transport)
        await application.initialize()
        initialized = True
        await application.start()
        started = True
        await application.updater.start_polling(drop_pending_updates=True)
        polling = True
        logger.info(f"Telegram bot started. Contract {config.contract_address} via {config.rpc_url}")

        yield
    finally:
        if polling:
            await application.updater.stop()
        if started:
            await application.stop()
        if initialized:
            await application.shutdown()

        if not session.closed:
            await session.close()
            logger.info("RPC session closed.")

        logger.info("Telegram bot has been shut down.")


web_app = FastAPI(lifespan=lifespan)


@web_app.api_route("/", methods=["GET", "HEAD"])
def health_check():
    return {"status": "ok, bot is running"}
