# fgtparse

`fgtparse` reads a FortiGate configuration, such as the text from
`show full-configuration` or a backup `.conf` file. It turns the configuration
into plain nested Python data made of dictionaries, lists, strings and `None`.
You can then search that data, print it as JSON or YAML, or export tables such
as firewall addresses and policies as CSV.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

Installing the package provides the `fgtparse` command:

```
fgtparse [INPUT] [-s TEXT] [--yaml] [--export {addresses,policies,generic}] [--path DOTTED.PATH] [-o FILE]
```

- `INPUT` is the configuration file. If you leave it out, or pass `-`, the
  command reads standard input.
- With no `--export`, the command prints the whole parsed tree as pretty JSON
  with sorted keys. Add `--yaml` to print YAML instead.
- `-s/--search TEXT` keeps only the parts of the tree whose keys or values
  contain `TEXT`. Matching ignores case. If nothing matches, the output is
  `null`.
- `--export addresses` writes `firewall address` as CSV. `--export policies`
  writes `firewall policy` as CSV. `--export generic --path system.interface`
  writes whatever node the dotted path names. After an export, the number of
  rows goes to standard error as `Exported N`.
- `-o/--output FILE` writes the result to a file instead of standard output.

The command exits with status 0 on success. It exits with status 1, printing
`Error: ...` to standard error, in three cases: the input cannot be read, the
configuration cannot be parsed, or the output cannot be written.

```
fgtparse backup.conf --yaml
fgtparse backup.conf -s wan
fgtparse backup.conf --export policies -o policies.csv
fgtparse --help
```

## Library use

### Parsing (`fgtparse.parser`)

```python
from fgtparse.parser import parse_forti

text = """
config firewall address
    edit "lan"
        set subnet 192.168.1.0 255.255.255.0
        set comment "office network"
    next
end
"""

config = parse_forti(text)
# {'firewall': {'address': {'lan': {'subnet': ['192.168.1.0', '255.255.255.0'],
#                                   'comment': 'office network'}}}}
```

The configuration maps onto data as follows:

- `config a b` opens the nested table `a` → `b`. `end` closes the innermost level.
- `edit NAME` creates the entry `NAME` in the current table, or reopens it if it
  already exists. `next` leaves the entry.
- `set KEY VALUE` stores a string. `set KEY V1 V2 ...` stores a list of strings.
- `append KEY V...` adds values to an existing setting. It turns a single string
  into a list.
- `unset KEY` stores `None`.
- Commands are matched without regard to case. Lines with any other command
  are ignored.
- Single and double quotes group words. A backslash escapes the next character.
  A `#` outside quotes starts a comment.

`tokenize(line)` gives you the line splitter on its own.

`parse_forti` raises `ParseError`, a subclass of `ValueError`, in these cases:

- `set`, `append` or `unset` has no key.
- A section would have to open beneath a plain value.
- A setting targets something that is not a table.

### Searching and rendering (`fgtparse.cli`)

```python
from fgtparse.cli import filter_deep, render_output

only_lan = filter_deep(config, "lan")          # matching keys and values, case-insensitive
print(render_output(config, "office", False))  # pretty JSON of the filtered data
print(render_output(config, "", True))         # YAML of everything
```

- `filter_deep` returns `None` when nothing matches.
- `render_output` returns an empty string when it is given `None` in place of a
  parsed tree.

### CSV export (`fgtparse.exporters`)

```python
from fgtparse.exporters import extract_addresses, extract_policies, to_csv

rows = extract_addresses(config)
csv_text = to_csv(rows, ["name", "type", "subnet", "fqdn", "interface", "comment"])

policy_rows = extract_policies(config)
policy_csv = to_csv(policy_rows, None)  # columns sorted alphabetically
```

Both extractors return one dictionary of strings per entry, ordered by entry
name. A few columns need a note:

- In the policy rows, the interface, address and service columns are joined
  with ` | `.
- A two-value `subnet` in the address rows, and the `nat` and `logtraffic`
  columns in the policy rows, hold the JSON form of their values. A string
  therefore appears there in double quotes.

`to_csv` builds the CSV text as follows:

- Columns named in the preferred list come first. Any other columns follow in
  alphabetical order.
- Fields that hold commas, quotes or newlines are quoted.
- An empty list of rows gives an empty string.

For any other part of the configuration, pick a node by dotted path and turn it
into rows:

```python
from fgtparse.exporters import get_by_path, rows_from_node, to_csv

node = get_by_path(config, "system.interface")
print(to_csv(rows_from_node(node), None))
```

- `get_by_path` returns a copy of the node, or `None` if the path leads nowhere.
- `rows_from_node` gives one row per entry when every child of the node is a
  table, with the entry's key in the `name` column. Otherwise it gives a single
  row for the node itself.
- Nested settings become dotted column names, and lists are joined with ` | `.
- `flatten` and `as_list` are available for building rows of your own.

## What it does not do

`fgtparse` has no graphical interface, editor window or file dialogs. All work
is done through the `fgtparse` command or from Python. It only reads
configurations and never writes a configuration back in FortiGate syntax.