import json
import threading

from liblogger.logger import F


def test_concurrent_writes_never_interleave(make_logger, streams):
    log = make_logger()
    threads_count, calls_per_thread = 16, 60
    barrier = threading.Barrier(threads_count)

    def run(worker: int) -> None:
        barrier.wait()
        for i in range(calls_per_thread):
            kind = i % 3
            if kind == 0:
                log.infow("info", F(worker=worker, i=i, payload="x" * 200))
            elif kind == 1:
                log.warnw("warn", F(worker=worker, i=i))
            else:
                log.errorw("error", i, F(worker=worker, i=i))

    threads = [threading.Thread(target=run, args=(n,)) for n in range(threads_count)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    out_lines = streams.stdout.getvalue().splitlines()
    err_lines = streams.stderr.getvalue().splitlines()
    entries = [json.loads(line) for line in out_lines + err_lines]

    assert len(entries) == threads_count * calls_per_thread
    assert {(entry["worker"], entry["i"]) for entry in entries} == {
        (w, i) for w in range(threads_count) for i in range(calls_per_thread)
    }
    assert all(entry["level"] == "error" for entry in map(json.loads, err_lines))
