"""
Walk-through of the logging API. Run with ``python -m liblogger``.
"""

from __future__ import annotations

import threading

from liblogger.logger import F, Fields, L, Labels, Level, Log
from liblogger.standardlogger import new, with_log_level


def i_will_panic(log: Log, i: int) -> None:
    if i == 0:
        # panicw carries an error code and any fields worth keeping
        log.panicw("Panicking!", 1000, F(i=i))
    i_will_panic(log, i - 1)


def give_me_the_log(log: Log) -> None:
    log.info("Log passed")


def run_routine(labels: Labels) -> None:
    # Independent child labels: clone, then add and delete freely
    routine_labels = labels.clone().add(L(component="routine", remove="me", also="me")).delete("remove", "also")

    routine_log = new(routine_labels)
    try:
        with routine_log.panic_logger():
            routine_log.info("Info from thread")
            raise RuntimeError("HELP!")
    except RuntimeError:
        # panic_logger only observes; the exception still reaches us
        pass


def main(panic: bool = False) -> None:
    labels = L(product="Persistor", id="client0", remove="me")
    labels.delete("remove").add(L(license="enterprise"))

    log = new(labels)

    with log, log.panic_logger():
        log.info("Info")
        log.warn("Warning")
        # ERROR, FATAL and PANIC require an error code
        log.error("Error", 0)

        log.infow("Info", Fields(userId=55, objId=64))
        log.warnw("Warn", Fields(objId=43))
        log.errorw("Error", 0, Fields(objId=43))

        # F is an alias of Fields
        log.infow("Info", F(userId=55, objId=64))
        log.errorw("Error", 0, F(objId=43))

        worker = threading.Thread(target=run_routine, args=(labels,))
        worker.start()
        worker.join()

        give_me_the_log(log)

        leveled = new(labels, with_log_level(Level.WARN))
        leveled.info("Info")  # dropped
        leveled.warn("Warn")
        leveled.error("Error", 0)

        if panic:
            i_will_panic(log, 5)
