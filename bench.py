from json import dumps

import pyperf

from incparsec.text import incremental
from tests.parsers.json import json, loads

DATA = dumps({"key_" + str(n): list(range(100)) for n in range(1000)})
CHUNK = 4096


def chunked_loads(src: str) -> object:
    parser = incremental(json)
    for i in range(0, len(src), CHUNK):
        parser.feed(src[i:i + CHUNK])
    return parser.finish().unwrap()


runner = pyperf.Runner()
runner.bench_func("json_parser", lambda: loads(DATA))
runner.bench_func("json_chunked_parser", lambda: chunked_loads(DATA))
