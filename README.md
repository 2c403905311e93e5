# clikit

Building blocks for command line applications: access to positional
arguments, grouping of commands into help categories, and input sources
that fill flag values from YAML, TOML or JSON configuration files.

## Installation

From a checkout of the project:

```
pip install .
```

Python 3.11 or later is needed. TOML is read with the standard library's
`tomllib`; YAML needs PyYAML, which is installed as a dependency.

## Positional arguments

`clikit.args.Args` wraps the positional arguments left after flag parsing.

```python
from clikit.args import Args

args = Args(["build", "--fast", "target"])
args.first()    # "build"
args.get(2)     # "target"
args.get(10)    # "" (a missing position gives an empty string)
args.tail()     # ["--fast", "target"], a new list
args.present()  # True
args.slice()    # a copy of every argument
len(args)       # 3
```

A negative index passed to `get` raises `IndexError`. `Args` objects can be
iterated and compare equal when they hold the same arguments.

## Command categories

`clikit.category.CommandCategories` collects commands under category names.
`add_command(category, command)` puts a command in its category, creating the
category the first time that name is seen; categories keep the order in which
they were first added. `categories()` returns a new list of `CommandCategory`
objects, each with a `name` and a `commands` list. `visible_commands()` leaves
out every command whose `hidden` attribute is true. Commands can be any
objects.

## Input sources

`clikit.altsrc.input_source.InputSourceContext` is the abstract interface of
an input source. It answers typed lookups by name: `int`, `float64`,
`string`, `bool`, `duration` (a `datetime.timedelta`), `string_slice`,
`int_slice` and `generic`; `source()` names where the values came from.

### Map-backed sources (YAML and TOML)

`MapInputSource(file, value_map)` answers lookups from a dictionary. A name
found as a key is used directly; otherwise a dotted name such as `"top.test"`
reaches into nested dictionaries. A name that is not there gives the type's
empty value (`0`, `0.0`, `""`, `False`, a zero `timedelta`, or `None` for the
slices and `generic`). A value of the wrong type raises `TypeError`:

```
Mismatched type for flag 'name'. Expected 'int' but actual is 'str'
```

`duration` accepts a `timedelta` or a string such as `"1m"`, `"1h30m"` or
`"1.5s"` (units `ns`, `us`, `µs`, `ms`, `s`, `m`, `h`). `generic` accepts any
object with a callable `set` method. `default_input_source()` returns an
empty `MapInputSource`.

```python
from clikit.altsrc.loaders import new_yaml_source_from_file, new_toml_source_from_file

yaml_source = new_yaml_source_from_file("settings.yaml")
toml_source = new_toml_source_from_file("settings.toml")
yaml_source.source()          # "settings.yaml"
toml_source.int("top.test")   # 15 for a file holding "[top]\ntest = 15"
```

A file that cannot be read or parsed raises `ValueError` with a message such
as `Unable to load Yaml file 'settings.yaml': inner error: ...`.

`clikit.altsrc.loaders.load_data_from(file_path)` reads the bytes of a local
file, or fetches the document when given an `http` or `https` URL. A URL with
any other scheme raises `ValueError`, and a local path that does not exist
raises `FileNotFoundError`.

### JSON sources

`clikit.altsrc.json_source` builds a `JsonSource` from JSON text with
`new_json_source(data)`, from a file or URL with
`new_json_source_from_file(path)`, or from a readable stream with
`new_json_source_from_reader(reader)`.

```python
from clikit.altsrc.json_source import new_json_source

source = new_json_source(b'{"top": {"test": 15}}')
source.int("top.test")   # 15
```

Unlike the map-backed sources, a `JsonSource` raises `KeyError` for a name
that is missing and `TypeError` for a value of the wrong type. `int` also
accepts JSON numbers with a fraction and truncates them; `float64` accepts
whole numbers. JSON has no duration type, so `duration` only succeeds for a
`timedelta` placed in the data by the caller.

### Choosing the file from a flag

`new_yaml_source_from_flag_func`, `new_toml_source_from_flag_func` and
`new_json_source_from_flag_func` take a flag name and return a function of a
context. If `context.is_set(name)` is true, the file named by
`context.string(name)` is loaded; otherwise `default_input_source()` is
returned.

## Applying values to flags

`clikit.altsrc.flag.FlagInputSourceExtension` describes a flag that may take
its value from an input source:

```python
from clikit.altsrc.flag import FlagInputSourceExtension

flag = FlagInputSourceExtension(
    name="test", kind="int", aliases=("t",), env_vars=("THE_TEST",), flag_set=flag_set
)
```

`kind` is one of `generic`, `string_slice`, `int_slice`, `bool`, `string`,
`path`, `int`, `duration` and `float64`; any other value raises `ValueError`.
`flag_set` must offer `set(name, text)` and `lookup(name)`, which returns an
object with a `value` attribute or `None`.

`apply_input_source_value(context, isc)` does nothing when `flag_set` is
`None`, when `context.is_set(name)` is true, or when any of `env_vars` exists
in the environment: a value from the command line or the environment wins
over the file. Otherwise the value from the source is written under the
flag's name and every alias. Ints, floats and durations are only applied
when greater than zero, strings when non-empty and booleans when true. Slices
replace the `value` of the looked-up flag. For a `path` flag, a relative path
is joined to the directory of the source file.

`apply_input_source_values(context, input_source, flags)` calls
`apply_input_source_value` on every flag that has it.
`init_input_source(flags, create_input_source)` and
`init_input_source_with_context(flags, create_input_source)` return a hook of
one argument, the context, meant to run before a command's action. The hook
builds the input source (the second form passes the context to the factory),
wraps any error from the factory in `ValueError`, and applies the source to
the flags.

`is_env_var_set(env_vars)` tells whether any of the named variables is set;
`float64_to_string(value)` formats a float in shortest form, switching to
exponent notation for very large or very small values (`1e+21`, `1e-05`).

## What the package does not do

clikit does not parse command lines, define applications or commands, print
help or run actions. The flag helpers work with any context object offering
`is_set(name)` and `string(name)`, and any flag set offering `set` and
`lookup`; the application supplies these.

## Running the tests

```
pip install -e ".[test]"
pytest
```