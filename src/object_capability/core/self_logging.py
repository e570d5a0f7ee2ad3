"""
Self-logging capability

Gives an object its own SelfLogger as `log`, so it can record its own events:

    account = logs_to_itself.create(Instance(object_id='account-42'))
    account.log.info('Opened', owner='alice')
    account.log.get_logs(level='INFO')

The log is named after the object's object_id slot (or its type name) and
follows the journal configuration: TSV files under LOG_DIR, or in-memory.
"""

from object_capability.core.capability import Capability
from object_capability.core.self_logger import SelfLogger, log_settings


def _open_log(obj, capability):
    if getattr(obj, 'log', None) is not None:
        return

    settings = log_settings()
    object_id = getattr(obj, 'object_id', None) or type(obj).__name__.lower()
    obj.log = SelfLogger(
        object_id=str(object_id),
        base_dir=settings['base_dir'],
        max_log_size=settings['max_log_size'],
        memory_limit=settings['memory_limit'],
    )


def _close_log(obj, capability):
    if 'log' in getattr(obj, '__dict__', {}):
        del obj.log


logs_to_itself = Capability('logs_to_itself').add_constructor(_open_log).add_destructor(_close_log)
