import threading


def run_concurrently(calls):
    """
    Start every call at once and collect ``(value, error)`` pairs

    A barrier releases all threads together so the calls genuinely contend.
    """
    barrier = threading.Barrier(len(calls))
    results = [None] * len(calls)

    def worker(index, call):
        barrier.wait()
        try:
            results[index] = (call(), None)
        except Exception as e:
            results[index] = (None, e)

    threads = [threading.Thread(target=worker, args=(i, call)) for i, call in enumerate(calls)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return results
