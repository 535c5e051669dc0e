"""Some utils to help with writing scripts run from the command line"""

from __future__ import annotations

import inspect
import logging

from argparse import ArgumentParser
from typing import Any, Callable

logger = logging.getLogger(__name__)

def specialize(v):
    """Specializes a value into a more specific type, if possible."""
    constants = dict(true=True, false=False, none=None)
    if isinstance(v, str):
        if v.lower() in constants:
            return constants[v.lower()]
        try:
            v = int(v)
        except ValueError:
            try:
                v = float(v)
            except ValueError:
                pass
    return v

def _cli_runner(func_list: list[Callable[..., Any]],
               description='',
               add_arbitrary=True,
               pre_func: Callable[..., Any]|None=None,
               argv: list[str]|None=None,
               **kw) -> Any:
    """Runs one of a given list of functions from the command line.

    If you give a `description` that is used for the argparser description. Else, we inspect the
    stack to get the caller's module name and docstring and create a generic description from those.

    By default, we allow the user to specify arbitrary key=value pairs on the command line to be
    passed to the function. You can disable this by setting `add_arbitrary` to False. The values
    are specialized using `specialize`, so the user can pass in ints, floats, bools and None.

    The `kw` arguments are used to define the command line arguments. Each key is the name of
    an argument, and the value is either a string (used as the help text) or a dict of keyword
    arguments to pass to `parser.add_argument`. If the first letter of the argument name
    hasn't been used yet, we add a short version of the argument using that letter. E.g. flag='set
    open flag' would create -f and --flag arguments, with help text 'set open flag'.

    For positional arguments, use the dict form of kw, and set the 'positional' key to True.

    If you provide a `pre_func`, it is called with the parsed arguments (as **kwargs) prior to
    running the selected function, and it should pop off (and return) any arguments that the
    function itself doesn't take. This can be used to set up logging, etc.

    `argv` defaults to `sys.argv[1:]`.

    This finally runs the selected function with the given arguments and returns the result.
    """
    funcs = {f.__name__: f for f in func_list}
    if not description:
        caller = inspect.stack()[1]
        module = inspect.getmodule(caller.frame)
        mod_name = module.__name__ if module else 'script'
        mod_doc = module.__doc__ if module and module.__doc__ else ''
        description = f'{mod_name} command line interface\n\n{mod_doc}'
    parser = ArgumentParser(description=description)
    parser.add_argument('func', choices=funcs, help=f"Function to run [{', '.join(funcs)}]")
    seen = ['h']
    for key, value in kw.items():
        cur_kw = {}
        if isinstance(value, str):
            cur_kw['help'] = value
        elif isinstance(value, dict):
            cur_kw.update(value)
        if cur_kw.pop('positional', False):
            parser.add_argument(key, **cur_kw)
        else:
            flag = key.replace('_', '-')
            cur_kw.setdefault('dest', key)
            if key[0] in seen:
                parser.add_argument(f'--{flag}', **cur_kw)
            else:
                parser.add_argument(f'-{key[0]}', f'--{flag}', **cur_kw)
                seen.append(key[0])
    if add_arbitrary:
        parser.add_argument('keyvalue', nargs='*', help='Key=value pairs to pass to the function')
    args = parser.parse_args(argv)
    kwargs = vars(args)
    for keyvalue in kwargs.pop('keyvalue', []):
        if '=' not in keyvalue:
            raise ValueError(f'Invalid key=value pair: {keyvalue}')
        key, value = keyvalue.split('=', 1)
        value = specialize(value)
        kwargs[key] = value
    func = funcs[kwargs.pop('func')]
    if pre_func:
        kwargs = pre_func(**kwargs)
    # drop options that were left unset, so the function's own defaults apply
    kwargs = {k: v for k, v in kwargs.items() if v is not None}
    return func(**_filter_kwargs(func, kwargs)) # type: ignore[operator]

def _filter_kwargs(func: Callable[..., Any], kwargs: dict[str, Any]) -> dict[str, Any]:
    """Keeps only the `kwargs` that `func` accepts, warning about the rest.

    The parser's options are shared by all functions, so e.g. `count -i 5` sets an option that
    `count` doesn't take.
    """
    params = inspect.signature(func).parameters.values()
    if any(p.kind == p.VAR_KEYWORD for p in params):
        return kwargs
    names = {p.name for p in params if p.kind in (p.POSITIONAL_OR_KEYWORD, p.KEYWORD_ONLY)}
    ignored = sorted(set(kwargs) - names)
    if ignored:
        logger.warning(f'{func.__name__} does not take {ignored}, ignoring them')
    return {k: v for k, v in kwargs.items() if k in names}
