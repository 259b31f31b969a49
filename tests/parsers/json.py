from typing import Dict, List, Tuple, Union

from incparsec import Delay, Parser
from incparsec.sequence import digit, eof, satisfy, sym
from incparsec.text import run, string

simple = {
    '"': '"', "\\": "\\", "/": "/",
    "b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t"
}


def to_number(s: str) -> Union[int, float]:
    if any(c in s for c in ".eE"):
        return float(s)
    return int(s)


def one_of(chars: str) -> Parser[str, str]:
    return satisfy(lambda c: c in chars)


JsonParser = Parser[str, object]

ws = one_of(" \n\r\t").many()


def punct(c: str) -> Parser[str, str]:
    return sym(c) << ws


value: Delay[str, object] = Delay()

hexdigit = one_of("0123456789abcdefABCDEF").label("hex digit")
escape = sym("\\") >> (
    one_of('"\\/bfnrt').fmap(simple.__getitem__) |
    sym("u") >> hexdigit.then(hexdigit).then(hexdigit).then(hexdigit).apply(
        lambda a, b, c, d: chr(int(a + b + c + d, 16))
    )
)
char = satisfy(lambda c: c not in '"\\' and c >= " ") | escape

json_string = (
    (sym('"') >> char.many() << sym('"')).fmap("".join).label("string") << ws
)

integer_part = sym("0") | (one_of("123456789") + digit.many())
fraction = sym(".") + digit.many1()
exponent = one_of("eE").label("exponent") + one_of("+-").maybe() + \
    digit.many1()
number: JsonParser = (
    sym("-").maybe() + integer_part + fraction.maybe() + exponent.maybe()
).recognize().fmap(to_number).label("number") << ws

true: JsonParser = string("true").fmap(lambda _: True) << ws
false: JsonParser = string("false").fmap(lambda _: False) << ws
null: JsonParser = string("null").fmap(lambda _: None) << ws


def make_dict(items: List[Tuple[object, object]]) -> Dict[object, object]:
    return dict(items)


json_dict: JsonParser = (
    (json_string << punct(":")) + value
).sep_by(punct(",")).fmap(make_dict).between(punct("{"), punct("}"))
json_list: JsonParser = value.sep_by(punct(",")).between(
    punct("["), punct("]")
)

value.define(
    (
        number | json_string | true | false | null | json_dict | json_list
    ).label("value")
)

json = ws >> value << eof()


def loads(src: str) -> object:
    return run(json, src).unwrap()
