# partup

Building blocks for preparing flash storage devices such as eMMC: working out
partition device names, writing raw images at sector offsets, finding out what
is mounted, and inspecting the contents of layout packages.

The package has no dependencies outside the standard library.

## Modules

- `partup.errors`: `PartupError`, carrying an `ErrorCode`, and its subclass
  `PackageError`, carrying a `PackageErrorCode`. Both expose `message` and
  `code`.
- `partup.file`: `read_raw(filename, offset, count)` reads a byte range (a
  negative count reads to the end), `copy(src, dest)` copies a file into a
  directory under its own basename and refuses to overwrite an existing file,
  `get_size(path)` returns a file's size in bytes.
- `partup.utils`: device naming helpers (`device_get_partition_path`,
  `device_get_partition_pattern`), path helpers (`path_from_filename`,
  `str_pre_remove`) and raw writing (`write_raw`, `write_raw_bootpart`,
  `has_bootpart`).
- `partup.flash`: the `Flash` base class with `device_path`, `config`,
  `prefix` and `skip_checksums`, and its three stages `init_device`,
  `setup_layout` and `write_data`. The base stages raise `PartupError` with
  `FLASH_INIT`, `FLASH_LAYOUT` and `FLASH_DATA`; concrete device types
  override them.
- `partup.log`: `LogWriter` writes timestamped, optionally coloured lines
  filtered by `LogLevel` and by the debug domains listed in the
  `G_MESSAGES_DEBUG` environment variable; `set_debug_domains` picks the
  output level from quiet/debug switches; `format_level` names a level;
  `init()` routes the standard `logging` module through a new `LogWriter`.
- `partup.mount`: `create_mount_point(name, prefix)` creates a directory below
  `/run/partup` by default; `find_mounted` and `device_mounted` read a mount
  table (`/proc/self/mounts` by default) and report a device's mounted
  partitions.
- `partup.package`: `get_layout_file` finds the single `.yaml` layout file in
  a directory, `validate_package_inputs` checks the inputs and output of a new
  package, `iter_dir_content` yields a listing of a directory tree with
  optional sizes, and `strip_blank_lines` removes empty lines from text.

## Examples

Partition device names:

```python
from partup.utils import device_get_partition_path, device_get_partition_pattern

device_get_partition_path("/dev/mmcblk0", 1)   # "/dev/mmcblk0p1"
device_get_partition_path("/dev/sda", 3)       # "/dev/sda3"

pattern = device_get_partition_pattern("/dev/loop1")
# matches "/dev/loop1" and "/dev/loop1p1", but not "/dev/loop10"
```

An unknown device name raises an error:

```python
from partup.errors import PartupError
from partup.utils import device_get_partition_path

try:
    device_get_partition_path("/dev/null", 3)
except PartupError as exc:
    print(exc, exc.code)
```

Input paths relative to a prefix:

```python
from partup.utils import path_from_filename, str_pre_remove

path_from_filename("lorem.txt", "data")   # "data/lorem.txt"
str_pre_remove("partup", 4)                # "up"
```

Writing an image into an existing device or image file, with offsets and sizes
given in sectors; the number of bytes written is returned:

```python
from partup.utils import write_raw

written = write_raw("root.ext4", "disk.img", 512, 0, 2048, 0)
```

Checking whether any partition of a device is in use:

```python
from partup.mount import device_mounted

if device_mounted("/dev/mmcblk0", "/proc/self/mounts"):
    print("device is busy")
```

Checking package inputs and listing a directory tree:

```python
from partup.package import get_layout_file, iter_dir_content, validate_package_inputs

layout = validate_package_inputs(["layout.yaml", "root.ext4"], "out.partup")
layout_in_dir = get_layout_file("some/directory")
for line in iter_dir_content("some/directory", True, True, 0):
    print(line)
```

## What the package does not do

- There is no command-line program; everything is used as a library.
- It does not mount or unmount anything. It creates mount point directories
  and reads an existing mount table.
- It does not build package archives. `validate_package_inputs` only checks
  the inputs and clears the way for the output file.
- It does not create partition tables, partitions or filesystems, and it does
  not parse layout configuration files. `Flash` is a base class with no
  concrete device type in this package.

## Tests

The test suite uses pytest and is installed with the `test` extra.