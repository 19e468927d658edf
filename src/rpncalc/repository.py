'''
Persistence for the calculator: stack snapshot rows, the pad, and the
format state.

A repository only stores and replays what it is given, in order. It
enforces none of the snapshot invariants; EpochStore checks those when it
reads rows back.
'''

from collections import namedtuple
from functools import partial
import logging
import queue
import threading


logger = logging.getLogger(__name__)


# One stack element. Every snapshot also has one row at depth -1 whose
# value is the snapshot's stack depth, so an empty stack still has a row.
Row = namedtuple('Row', 'epoch depth value')


class MemoryRepository:
    '''
    Repository holding everything in memory.
    '''

    def __init__(self, rows=(), pad='', format_state=None):
        self.rows = list(rows)
        self.pad = pad
        self.format_state = format_state

    def insert_rows(self, rows):
        self.rows.extend(rows)

    def select_rows(self):
        return list(self.rows)

    def delete_epoch(self, epoch):
        self.rows = [row for row in self.rows if row.epoch != epoch]

    def delete_before(self, epoch):
        self.rows = [row for row in self.rows if row.epoch >= epoch]

    def clear_rows(self):
        self.rows = []

    def get_pad(self):
        return self.pad

    def set_pad(self, pad):
        self.pad = pad

    def get_format(self):
        return self.format_state

    def set_format(self, format_state):
        self.format_state = format_state


class SerialRepository:
    '''
    Run another repository's writes on one background thread.

    Writes return immediately and happen in the order they were issued.
    Reads wait until every earlier write has happened, so a caller always
    reads its own writes.
    '''

    WRITES = ('insert_rows', 'delete_epoch', 'delete_before', 'clear_rows',
              'set_pad', 'set_format')
    READS = ('select_rows', 'get_pad', 'get_format')

    def __init__(self, repository):
        self.repository = repository
        self.jobs = queue.Queue()
        self.worker = threading.Thread(target=self._work, daemon=True)
        self.worker.start()

    def _work(self):
        while True:
            job, done = self.jobs.get()
            try:
                if job is None:
                    return
                done['result'] = job()
            except Exception as e:
                logger.exception('Background repository job failed')
                done['error'] = e
            finally:
                if 'event' in done:
                    done['event'].set()
                self.jobs.task_done()

    def _submit(self, job, wait):
        done = {}
        if wait:
            done['event'] = threading.Event()
        self.jobs.put((job, done))
        if wait:
            done['event'].wait()
            if 'error' in done:
                raise done['error']
            return done.get('result')

    def __getattr__(self, name):
        if name in type(self).WRITES:
            method = getattr(self.repository, name)
            return lambda *args: self._submit(partial(method, *args),
                                              wait=False)
        if name in type(self).READS:
            method = getattr(self.repository, name)
            return lambda *args: self._submit(partial(method, *args),
                                              wait=True)
        raise AttributeError(name)

    def flush(self):
        '''
        Block until every write issued so far has happened.
        '''
        self.jobs.join()

    def close(self):
        '''
        Finish outstanding writes and stop the worker.
        '''
        self._submit(None, wait=False)
        self.worker.join()
