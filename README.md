# gardenray

Software rendering of first-person 3D mazes into a 320x200, 256-colour
palette frame buffer. Everything is plain Python working on in-memory
pixel buffers: a rendered frame is a `FrameBuffer` whose `to_bytes()`
gives 64000 palette indices, one byte per pixel.

## Renderers

- **Wireframe maze** (`gardenray.wiremaze`): `render(maze, viewer)` draws
  the view window (`draw_box`) and the corridor ahead as white lines out
  to four squares (`draw_maze`). A `Viewer` has a position and a heading
  (0 north, 1 east, 2 south, 3 west) and offers `move_forward`,
  `move_back`, `turn_left` and `turn_right`; moves into a wall are
  refused. `apply_input(viewer, maze, keyboard)` moves the viewer from
  the arrow keys held on a `Keyboard`.
- **Bitmapped maze** (`gardenray.bitmaze`): `BitmapMaze(images, maze,
  position, direction)` builds the view recursively from slices of nine
  188x120 wall bitmaps (five front views by distance, four side views)
  and pastes them into a window at (110, 0) with `draw(buffer)`.
  `apply_events(events)` moves and turns the viewer from an `Events`
  value and returns whether to quit. `load_images(directory)` loads the
  nine Targa files `front1.tga`…`front5.tga`, `side1.tga`…`side4.tga`;
  `grab_compass_faces(pixels)` cuts four 42x41 compass faces out of a
  320-pixel-wide picture.
- **Raycasting** (`gardenray.raycast`): `render(grid, xview, yview,
  viewing_angle)` casts one ray per viewport column and draws each wall
  column in the colour given by its map value. `cast_ray` returns the
  `RayHit` for a single ray.
- **Textured raycasting** (`gardenray.textured`): `render(grid, floor,
  ceiling, textures, viewing_angle)` draws textured walls, floor and
  ceiling. `textures` is a sheet 256 pixels wide of 64x64 tiles, four per
  row; map value *n* selects tile *n − 1*. `render_default_maps(textures)`
  uses the built-in maps.
- **Lit raycasting** (`gardenray.lit`): `render(textures, light_table,
  viewing_angle, intensity, ambient_level)` is the textured renderer
  with light fall-off by distance, an ambient level and the built-in
  floor and ceiling light maps.

## Supporting modules

- `gardenray.framebuffer`: `FrameBuffer` with `pixel`, `plot`, `clear`,
  Bresenham `line`, clipped `vert_line`, `rect`, `rect_fill`, `grab` and
  `blit`. Drawing outside the buffer raises `IndexError`.
  `palette_grid()` shows all 256 colours as a 16x16 grid;
  `show_image(pixels, width, height)` puts an image in the top-left
  corner of a screen. `parse_bmp` / `load_bmp` read uncompressed 8-bit
  BMP files into a `Bitmap`, raising `BitmapError`.
- `gardenray.pcx`: `parse_pcx` / `load_pcx` decode 256-colour PCX images
  up to 320x200 into a `PcxImage` (header, pixels, 6-bit palette),
  raising `PcxError`; `decode_rle` expands PCX run-length data;
  `compress` packs pixels into runs of zeros and literal bytes;
  `transpose_bitmap` swaps rows and columns.
- `gardenray.targa`: `parse_tga` / `load_tga` read 8-bit uncompressed
  colour-mapped Targa images with a 24-bit palette into a `TgaImage`,
  raising `TgaError`.
- `gardenray.trig`: 4096-step fixed-point (16.16) `cos_table`,
  `sin_table`, `fixed_cos`, `fixed_sin`, `fixmul` and `fixdiv`, and the
  generator of the `trig.h` / `trig.cpp` table files.
- `gardenray.lighting`: `build_light_table(palette, target)` maps every
  colour at each of 33 light levels to the nearest palette entry;
  `light_levels(intensity, multiplier)` gives the light level for each
  distance; `save_light_table` / `load_light_table` store a table as
  33 rows of 256 bytes.
- `gardenray.maps`: `get_map(name)` returns the built-in 16x16 grids
  `"map"`, `"floor"`, `"floor_lights"`, `"ceiling"` and
  `"ceiling_lights"`.
- `gardenray.keyboard`: `Key` codes, `scancode_for`, and a `Keyboard`
  fed raw scan codes through `handle_scancode`, answering `is_key_down`
  and `was_pressed` (once per press).
- `gardenray.events`: `get_event(sources, keys, mouse, joystick,
  calibration)` combines keyboard, mouse and joystick readings, chosen
  with `EventSource` flags, into `Events` (forward, back, left, right,
  quit), using a `JoystickCalibration` for the joystick centre.

## Installation

```
pip install .
```

Python 3.10 or later is required; there are no third-party dependencies.

## Example

```python
from gardenray.pcx import load_pcx
from gardenray.lighting import load_light_table
from gardenray.lit import render

sheet = load_pcx("images.pcx")
table = load_light_table("litesorc.dat")
frame = render(sheet.pixels, table, viewing_angle=3.14)
pixels = frame.to_bytes()   # 64000 palette indices
palette = sheet.palette     # 768 bytes of 6-bit RGB
```

## Command-line tools

Generate the fixed-point trigonometry tables `trig.h` and `trig.cpp`
in the current directory, or in a directory given as an argument:

```
gardenray-maketrig
gardenray-maketrig out/
```

Build a lightsourcing table from the palette of a PCX file, fading
towards black or towards an optional red, green and blue target
(6-bit values):

```
gardenray-mklite images.pcx
gardenray-mklite images.pcx 63 0 0
gardenray-mklite images.pcx -o table.dat
```

The table is written to `litesorc.dat` unless `-o` names another file.

## What this package does not do

- It opens no window and shows nothing on screen; frames are byte
  buffers with a separate palette, left to your own display code.
- It reads no real keyboard, mouse or joystick. `Keyboard` and
  `get_event` work on scan codes and readings you pass in, and there is
  no interactive walk-through command.
- No renderer uses the fixed-point tables in `gardenray.trig`; the
  raycasters work in floating point.
- It writes no image files; `compress` produces a zero-run format, not
  PCX.

## Running the tests

```
pip install ".[test]"
pytest
```