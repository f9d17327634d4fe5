#!/usr/bin/env python
from collections.abc import Sequence
from dataclasses import dataclass

from telegram import Message, MessageEntity, Update
from telegram.error import TelegramError
from telegram.ext import (
    Application,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from config.base import (
    FORMAT_MARKDOWN_LINKS,
    FORMAT_SKIP_MARKDOWN,
    LOGGER,
    MAX_MESSAGE_LENGTH,
    TG_BOT_NAME,
    TG_BOT_TOKEN,
)
from richtext.entities import FormattedText
from richtext.html_render import render_formatted_text_as_html
from services.formatting_service import FormattingService
from utils.sanitize import sanitize_message
from utils.text_utils import utf16_length

HELP_TEXT = (
    "**Available Commands**\n\n"
    "/start - Start the bot\n"
    "/help - Show this help message\n\n"
    "Send any text and get it back formatted:\n"
    "**bold**, __italic__, ~~strike~~, ||spoiler||, `code`,\n"
    "[links](example.com) and ```python\nprint('code blocks')\n```"
)


@dataclass(frozen=True)
class AppServices:
    formatting_service: FormattingService


def build_markup(
    text: str,
    entities: Sequence[MessageEntity],
    formatting_service: FormattingService,
) -> str:
    """Turn an incoming message into markup for the formatter.

    Formatting applied in the client arrives as entities and is rendered as
    tags; plain text is escaped so only markdown syntax is interpreted.
    """
    if entities:
        incoming = formatting_service.from_message_entities(text, entities)
        return render_formatted_text_as_html(incoming)
    return sanitize_message(text, MAX_MESSAGE_LENGTH)


async def reply_formatted(
    message: Message, formatted: FormattedText, formatting_service: FormattingService
) -> None:
    entities = formatting_service.to_message_entities(formatted)
    await message.reply_text(formatted.text, entities=entities)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    user = update.effective_user
    if not user or not update.message:
        return
    await update.message.reply_text(
        f"Hi {user.first_name or 'there'}! I'm {TG_BOT_NAME}. "
        "Send me markdown and I'll show you how it renders."
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not update.message:
        return
    services: AppServices = context.application.bot_data["services"]
    formatted = services.formatting_service.format(HELP_TEXT)
    await reply_formatted(update.message, formatted, services.formatting_service)


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    user = update.effective_user
    if not user or not update.message:
        return
    services: AppServices = context.application.bot_data["services"]

    raw_text = update.message.text or ""
    markup = build_markup(raw_text, update.message.entities, services.formatting_service)
    if not markup:
        LOGGER.warning(f"Empty message from user {user.id} after sanitization")
        await update.message.reply_text("Please send some text to format.")
        return

    formatted = services.formatting_service.format(markup)
    if not formatted.text:
        await update.message.reply_text("Nothing left to show after formatting.")
        return
    if utf16_length(formatted.text) > MAX_MESSAGE_LENGTH:
        await update.message.reply_text("The formatted message is too long to send back.")
        return

    LOGGER.debug(f"User {user.id} formatted message: {formatted.to_dict()}")
    try:
        await reply_formatted(update.message, formatted, services.formatting_service)
    except TelegramError as exc:
        LOGGER.exception("Message handling error: %s", exc)
        await update.message.reply_text("Sorry, I couldn't send that formatted message.")


async def initialize_services(app: Application) -> None:
    app.bot_data["services"] = AppServices(
        formatting_service=FormattingService(
            with_markdown_links=FORMAT_MARKDOWN_LINKS,
            skip_markdown=FORMAT_SKIP_MARKDOWN,
        )
    )


def main() -> None:
    if not TG_BOT_TOKEN:
        raise RuntimeError("TG_BOT_TOKEN is required")
    application = Application.builder().token(TG_BOT_TOKEN).post_init(initialize_services).build()

    application.add_handler(CommandHandler("start", start))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))

    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
