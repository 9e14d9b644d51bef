"""Telegram handlers: letters in, task views out."""
import asyncio
import logging
from typing import List, Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.error import BadRequest
from telegram.ext import CallbackContext

from wordscramble import monitoring
from wordscramble.config import settings
from wordscramble.exceptions import TrainingFinishedError
from wordscramble.models.base import SessionLocal
from wordscramble.render import render_result, render_stats, render_task
from wordscramble.services.result_service import ResultService
from wordscramble.services.session_service import SessionService, is_valid_letter
from wordscramble.services.storage_service import DatabaseSnapshotStorage
from wordscramble.services.training import Training
from wordscramble.services.word_source import load_words

# Get logger for this module
logger = logging.getLogger(__name__)

# Button texts
RESUME = "▶️ Resume"
START_OVER = "🔄 Start over"
NEW_TRAINING = "🆕 New training"
VIEW_STATISTICS = "📊 Statistics"

LETTERS_PER_ROW = 5

MSG_NO_TRAINING = "No training in progress. Send /start to begin."
MSG_PENDING = "Wait for the next word..."
MSG_NOT_A_LETTER = "Send a single letter or press one of the letter buttons."

_words: Optional[List[str]] = None


def get_words() -> List[str]:
    """Load the word list once per process."""
    global _words
    if _words is None:
        _words = load_words()
    return _words


def get_session_service(db, user_id: int) -> SessionService:
    return SessionService(
        DatabaseSnapshotStorage(db, user_id),
        words=get_words(),
        results=ResultService(db),
        user_id=user_id,
    )


async def log_received(update: Update, context_type: str) -> None:
    """Log an incoming update."""
    txt = ""
    if context_type == "start":
        txt = ""
    elif update.callback_query:
        txt = f" {update.callback_query.data}"
    elif update.message:
        txt = f" {update.message.text}"
    logger.info(f"Received @{context_type:8} from user {update.effective_user.username} ({update.effective_user.id}){txt}")


async def send_popup_message(update: Update, text: str, show_alert: bool = False) -> None:
    """Answer a button press with a popup, or reply to a typed message."""
    if update.callback_query:
        await update.callback_query.answer(text=text, show_alert=show_alert)
    else:
        await update.message.reply_text(text)


async def send_or_edit(update: Update, text: str, reply_markup: Optional[InlineKeyboardMarkup] = None) -> None:
    """Edit the message behind a button press, or send a new one."""
    if update.callback_query:
        try:
            await update.callback_query.edit_message_text(text, reply_markup=reply_markup)
        except BadRequest as e:
            # Re-rendering an unchanged task is not an error
            if "not modified" not in str(e).lower():
                raise
    else:
        await update.message.reply_text(text, reply_markup=reply_markup)


def build_task_keyboard(training: Training, task_index: Optional[int] = None) -> InlineKeyboardMarkup:
    """Letter buttons for the task plus a row of finished tasks to look back at."""
    view = render_task(training, task_index)
    keyboard: List[List[InlineKeyboardButton]] = []

    row: List[InlineKeyboardButton] = []
    for position, letter in view.letters:
        row.append(InlineKeyboardButton(letter.upper(), callback_data=f"letter_{position}_{letter}"))
        if len(row) == LETTERS_PER_ROW:
            keyboard.append(row)
            row = []
    if row:
        keyboard.append(row)

    history = []
    for index in training.finished_task_indexes:
        mark = "✅" if training.tasks[index].is_complete else "❌"
        history.append(InlineKeyboardButton(f"{index + 1}{mark}", callback_data=f"task_{index}"))
    if history and training.current_task is not None:
        history.append(InlineKeyboardButton(f"{training.task_number}▶️", callback_data=f"task_{training.current_task_index}"))
    if history:
        keyboard.append(history)

    return InlineKeyboardMarkup(keyboard)


async def send_task(update: Update, training: Training, task_index: Optional[int] = None) -> None:
    view = render_task(training, task_index)
    await send_or_edit(update, view.text, reply_markup=build_task_keyboard(training, task_index))


async def send_stats(update: Update, training: Training) -> None:
    view = render_task(training, len(training.tasks) - 1)
    keyboard = InlineKeyboardMarkup([
        [InlineKeyboardButton(NEW_TRAINING, callback_data="restart"),
         InlineKeyboardButton(VIEW_STATISTICS, callback_data="statistics")],
    ])
    await send_or_edit(update, f"{view.text}\n\n{render_stats(training)}", reply_markup=keyboard)


async def handle_start(update: Update, context: CallbackContext) -> None:
    """Offer to resume a stored training or start a new one."""
    await log_received(update, "start")

    db = SessionLocal()
    try:
        service = get_session_service(db, update.effective_user.id)
        if service.has_saved_training():
            keyboard = InlineKeyboardMarkup([
                [InlineKeyboardButton(RESUME, callback_data="resume"),
                 InlineKeyboardButton(START_OVER, callback_data="restart")],
            ])
            await send_or_edit(update, "You have an unfinished training. Continue where you left off?", keyboard)
            return

        training = service.new_training()
        await send_task(update, training)
    finally:
        db.close()


async def handle_callback(update: Update, context: CallbackContext) -> None:
    """Handle callback queries from inline keyboard."""
    query = update.callback_query
    await log_received(update, "callback")

    with monitoring.request_duration.labels(handler="callback").time():
        if query.data in ("resume", "restart"):
            await query.answer()
            await start_training(update, context, resume=query.data == "resume")
        elif query.data.startswith("letter_"):
            letter = query.data.rsplit("_", 1)[-1]
            await process_letter(update, context, letter)
        elif query.data.startswith("task_"):
            await show_task(update, context)
        elif query.data == "statistics":
            await query.answer()
            await show_statistics(update, context)
        else:
            logger.warning(f"Unknown callback data: {query.data}")
            await query.answer()


async def handle_message(update: Update, context: CallbackContext) -> None:
    """Handle typed letters."""
    await log_received(update, "message")

    text = (update.message.text or "").strip()
    if not is_valid_letter(text):
        await update.message.reply_text(MSG_NOT_A_LETTER)
        return

    with monitoring.request_duration.labels(handler="message").time():
        await process_letter(update, context, text)


async def start_training(update: Update, context: CallbackContext, resume: bool) -> None:
    db = SessionLocal()
    try:
        service = get_session_service(db, update.effective_user.id)
        training = service.start(resume=resume)
        context.user_data["pending"] = False
        await send_task(update, training)
    finally:
        db.close()


async def process_letter(update: Update, context: CallbackContext, letter: str) -> None:
    """Feed one letter to the user's training and show the outcome."""
    if context.user_data.get("pending"):
        await send_popup_message(update, MSG_PENDING)
        return

    db = SessionLocal()
    try:
        service = get_session_service(db, update.effective_user.id)
        training = service.load()
        if training is None:
            await send_popup_message(update, MSG_NO_TRAINING)
            return

        try:
            result = service.handle_input(letter)
        except TrainingFinishedError:
            await send_popup_message(update, MSG_NO_TRAINING)
            return

        # Hold back input from the moment a word is finished until the next one is shown
        pause = result.task_finished and not result.training_complete
        if pause:
            context.user_data["pending"] = True
        try:
            if update.callback_query:
                await update.callback_query.answer(text=render_result(result, letter))

            if result.training_complete:
                await send_stats(update, training)
                return

            if pause:
                await send_task(update, training, training.current_task_index - 1)
                await asyncio.sleep(settings.training.pause_seconds)

            await send_task(update, training)
        finally:
            if pause:
                context.user_data["pending"] = False
    finally:
        db.close()


async def show_task(update: Update, context: CallbackContext) -> None:
    """Show a task from the history of the current training."""
    query = update.callback_query
    db = SessionLocal()
    try:
        service = get_session_service(db, update.effective_user.id)
        training = service.load()
        if training is None:
            await query.answer(text=MSG_NO_TRAINING)
            return
        try:
            index = int(query.data.split("_", 1)[1])
            service.view_task(index)
        except (ValueError, IndexError):
            await query.answer(text="This task is not available")
            return
        await query.answer()
        await send_task(update, training, index)
    finally:
        db.close()


async def show_statistics(update: Update, context: CallbackContext) -> None:
    """Show totals over the user's finished trainings."""
    db = SessionLocal()
    try:
        stats = ResultService(db).get_user_statistics(update.effective_user.id)
        if not stats.trainings:
            message = "No finished trainings yet. Send /start to begin."
        else:
            message = (
                f"📊 Finished trainings: {stats.trainings}\n"
                f"Words: {stats.tasks}\n"
                f"Words without errors: {stats.clean_tasks}\n"
                f"Total errors: {stats.errors}"
            )
            if stats.last_most_broken_task:
                message += f"\nHardest word last time: \"{stats.last_most_broken_task}\""
        keyboard = InlineKeyboardMarkup([[InlineKeyboardButton(NEW_TRAINING, callback_data="restart")]])
        await send_or_edit(update, message, reply_markup=keyboard)
    finally:
        db.close()


async def handle_error(update: object, context: CallbackContext) -> None:
    """Log errors raised by handlers."""
    logger.error(f"Error while handling update {update}: {context.error}", exc_info=context.error)
