from hypertile import tiling, drawtools

# squares meeting five at a vertex, in two alternating colors
generator = tiling.TilingGenerator.builtin("checker", 4, 5)

# drag with the left mouse button to move around the plane
view = drawtools.TilingView(generator, depth=4, model="poincare")
view.set_projection("klein")
view.show()
