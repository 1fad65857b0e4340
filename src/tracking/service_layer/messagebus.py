# pylint: disable=broad-except
"""Message bus for the tracking service following Cosmic Python pattern."""

from __future__ import annotations
import logging
from typing import List, Dict, Callable, Type, Union, TYPE_CHECKING

from tracking.domain import commands, events
from tracking.service_layer import handlers

if TYPE_CHECKING:
    from tracking.service_layer.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)

Message = Union[commands.Command, events.Event]


def handle(
    message: Message,
    uow: AbstractUnitOfWork,
):
    """Handle message (command or event) with the appropriate handler."""
    results = []
    queue = [message]

    while queue:
        message = queue.pop(0)

        if isinstance(message, events.Event):
            handle_event(message, queue, uow)
        elif isinstance(message, commands.Command):
            cmd_result = handle_command(message, queue, uow)
            results.append(cmd_result)
        else:
            raise Exception(f"{message} was not an Event or Command")

    return results


def handle_event(
    event: events.Event,
    queue: List[Message],
    uow: AbstractUnitOfWork,
):
    """Handle event by calling all registered event handlers."""
    for handler in EVENT_HANDLERS[type(event)]:
        try:
            logger.debug(f"handling event {event} with handler {handler}")
            handler(event, uow=uow)
            queue.extend(uow.collect_new_events())
        except Exception:
            logger.exception("Exception handling event %s", event)
            continue


def handle_command(
    command: commands.Command,
    queue: List[Message],
    uow: AbstractUnitOfWork,
):
    """Handle command by calling the registered command handler."""
    logger.debug(f"handling command {command}")
    try:
        handler = COMMAND_HANDLERS[type(command)]
        result = handler(command, uow=uow)
        queue.extend(uow.collect_new_events())
        return result
    except Exception:
        logger.exception("Exception handling command %s", command)
        raise


# Event handlers - multiple handlers can respond to same event
EVENT_HANDLERS = {
    events.TrackingCreated: [handlers.log_tracking_created],
    events.TrackingStatusChanged: [handlers.log_status_changed],
}  # type: Dict[Type[events.Event], List[Callable]]

# Command handlers - single handler per command type
COMMAND_HANDLERS = {
    commands.CreateTracking: handlers.create_tracking,
    commands.UpdateTracking: handlers.update_tracking,
    commands.DeleteTracking: handlers.delete_tracking,
    commands.AddTrackingEvent: handlers.add_tracking_event,
    commands.UpdateTrackingEvent: handlers.update_tracking_event,
    commands.DeleteTrackingEvent: handlers.delete_tracking_event,
}  # type: Dict[Type[commands.Command], Callable]
