# a2lgen

`a2lgen` reads C source files and finds the global variable declarations that
carry A2L annotations in the comments above them. The annotations say how a
variable is to be described for calibration: as a measurement or as a
characteristic, with limits, unit, description and so on.

## Annotating C code

An annotated area starts at a top-level comment that contains `a2l on`. Every
comment in the area is collected, and the next initialised declaration takes
the collected comments:

```c
/* a2l on
   a2l-type Measurement
   a2l-description Vehicle speed
   a2l-min 0
   a2l-max 250
   a2l-unit km/h
*/
float vehicle_speed = 0.0f;
```

The area ends at any top-level item that is not a comment, an initialised
declaration or an `#ifdef`/`#ifndef` block (for example a function definition,
an `#include` or a declaration without an initialiser).

Keys recognised inside a comment, one per line:

| Key | Field of `A2lCodeComment` | Meaning |
| --- | --- | --- |
| `a2l on` / `a2l off` | `on` | switch annotation on or off |
| `a2l-type` | `a2l_type` | `Measurement` or `Characteristic`, anything else gives `UNKNOWN` |
| `a2l-characteristic-type` | `characteristic_type` | `Ascii`, `Value` or `ValBlk`; anything else gives `VALUE` |
| `a2l-description` | `description` | free text |
| `a2l-min`, `a2l-max` | `min_value`, `max_value` | number (integer, decimal or scientific notation); otherwise left at 0.0 |
| `a2l-linear-coeffs`, `a2l-rat-func-coeffs` | `linear_coeffs`, `rat_func_coeffs` | free text |
| `a2l-display-identifier`, `a2l-group`, `a2l-max-refresh`, `a2l-unit` | `display_identifier`, `group`, `max_refresh`, `unit` | free text |
| `a2l-read-only`, `a2l-read-write` | `read_only`, `read_write` | flags |

## Command line

```
a2lgen [FILE] [-D OPTION ...]
```

The command reads `FILE` (`test_file.c` when none is given) and prints each
annotated declaration with the comments that belong to it. `-D`/`--option`
names a compiler option treated as defined and may be repeated; without it the
options `TEST`, `ENABLE` and `ENABLE_TEST` are used. The contents of
`#ifdef`/`#ifndef` blocks are only reported through logging (the block's
children when its name is a defined option, otherwise its `#else`/`#elif`
branch); they are not added to the printed list.

The command exits with status 1 when the file cannot be read or cannot be
parsed, and 0 otherwise.

## Library use

```python
from a2lgen.comment import A2lCodeComment, A2lType

note = A2lCodeComment.from_comment("a2l on\na2l-type Measurement\na2l-min -1.5e2")
assert note.on
assert note.a2l_type is A2lType.MEASUREMENT
assert note.min_value == -150.0
```

```python
from a2lgen.generator import A2lCommentGenerator, DataType, c_type_to_data_type

gen = A2lCommentGenerator()
assert gen.match_c_type_to_a2l_type("uint16_t") is DataType.UWORD
assert c_type_to_data_type("unsigned long long") is DataType.A_UINT64
measurement = gen.create_measurement(
    "speed", "Vehicle speed", DataType.FLOAT32_IEEE, "NO_COMPU_METHOD", 1, 0.0, 250.0
)
```

C type names are matched case-insensitively; an unknown type logs a warning
and maps to `DataType.UBYTE`. `create_characteristic` and `create_measurement`
return `Characteristic` and `Measurement` dataclasses.

```python
from a2lgen.cli import collect_annotated_declarations
from a2lgen.code_parser import CodeParser

code = "// a2l on\n// a2l-type Measurement\nint speed = 0;\n"
assert collect_annotated_declarations(code) == [
    ("// a2l on\n// a2l-type Measurement\n", "int speed = 0;")
]
assert CodeParser().find_variables(code) == ["speed"]
```

`CodeParser.parse_file` reads a file and returns the names of its initialised
top-level variables. `a2lgen.c_syntax.parse_top_level` splits C source into
top-level `Node`s (comments, declarations, function definitions, preprocessor
directives and conditional blocks) and raises `CSyntaxError` on input it
cannot split.

## What it does not do

The package reads annotations and can build `Measurement` and `Characteristic`
objects, but it does not write an A2L file, and the command does not turn the
annotations it finds into A2L objects. The C reader only splits a file into its
top-level items; it does not run the preprocessor or check C semantics.

## Tests

```
pip install -e .[test]
pytest
```