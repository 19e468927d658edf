'''
Undo log of stack snapshots.

Every stack-mutating operation appends a full snapshot of the stack, tagged
with the next epoch number. Undo deletes the latest epoch; old epochs are
pruned so only HISTORY_DEPTH of them are kept.
'''

from collections import namedtuple
import logging

from .repository import Row
from .util import LogCorruption


logger = logging.getLogger(__name__)


Snapshot = namedtuple('Snapshot', 'epoch values')


def snapshot_rows(snapshot):
    '''
    Rows for a snapshot: depth 0..n-1 hold the values, depth -1 holds n.

    Example: a stack of 3.1 over 4.7 at epoch 5 is (5, 0, 3.1), (5, 1, 4.7)
    and (5, -1, 2.0).
    '''
    rows = [Row(snapshot.epoch, depth, value)
            for depth, value
            in enumerate(snapshot.values)]
    rows.append(Row(snapshot.epoch, -1, float(len(snapshot.values))))
    return rows


def snapshot_from_rows(rows):
    '''
    Rebuild the latest snapshot from a batch of rows.

    Returns (first epoch, snapshot), or None if there are no rows at all.
    Raises LogCorruption unless the latest epoch's depths run exactly
    -1, 0, ..., n-1 with n recorded in the depth -1 row.
    '''
    if not rows:
        return None
    first = min(row.epoch for row in rows)
    last = max(row.epoch for row in rows)
    latest = sorted((row for row in rows if row.epoch == last),
                    key=lambda row: row.depth)
    depths = [row.depth for row in latest]
    if depths != list(range(-1, len(latest) - 1)) or \
       latest[0].value != len(latest) - 1:
        raise LogCorruption('Invalid epoch {}: depths {}'.format(last, depths))
    return first, Snapshot(last, tuple(row.value for row in latest[1:]))


class EpochStore:
    '''
    Append-only log of stack snapshots, the only durable stack state.
    '''

    HISTORY_DEPTH = 30

    def __init__(self, repository):
        self.repository = repository
        self.first_epoch = 0
        self._current = None
        self.refresh()

    @property
    def last_epoch(self):
        return self._current.epoch

    def current(self):
        '''
        Return the snapshot at the latest epoch.
        '''
        return self._current

    def refresh(self):
        '''
        Reread the log from the repository and check it.

        An empty log, or one that fails the check, starts over at epoch 0
        with an empty stack.
        '''
        try:
            loaded = snapshot_from_rows(self.repository.select_rows())
        except LogCorruption as e:
            logger.warning('%s; discarding undo history', e)
            loaded = None
        if loaded is None:
            self.reset()
        else:
            self.first_epoch, self._current = loaded
        return self._current

    def reset(self):
        logger.info('Starting snapshot log at epoch 0')
        self.repository.clear_rows()
        self.first_epoch = 0
        self._write(Snapshot(0, ()))

    def _write(self, snapshot):
        self.repository.insert_rows(snapshot_rows(snapshot))
        self._current = snapshot

    def append(self, values):
        '''
        Store values as the snapshot for the next epoch, and return it.
        '''
        epoch = self.last_epoch + 1
        self.prune(epoch)
        snapshot = Snapshot(epoch, tuple(values))
        logger.debug('Appending epoch %d, depth %d', epoch, len(values))
        self._write(snapshot)
        return snapshot

    def rollback(self):
        '''
        Delete the latest epoch, restoring the one before it.

        Return True if there was nothing to roll back, False otherwise.
        '''
        if self.last_epoch <= self.first_epoch:
            return True
        logger.debug('Rolling back epoch %d', self.last_epoch)
        self.repository.delete_epoch(self.last_epoch)
        self.refresh()
        return False

    def prune(self, new_epoch):
        '''
        Delete old epochs so at most HISTORY_DEPTH of them precede new_epoch.
        '''
        keep_from = new_epoch - type(self).HISTORY_DEPTH
        if self.first_epoch < keep_from:
            logger.info('Pruning epochs %d..%d', self.first_epoch, keep_from - 1)
            self.repository.delete_before(keep_from)
            self.first_epoch = keep_from
