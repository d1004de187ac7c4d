#!/usr/bin/env python3
"""
LightForge - A Python Whitted-style Ray Tracer

Main entry point for rendering the demo scenes.
"""

import argparse
import logging
import math
import sys
import time
from pathlib import Path

from lightforge.camera import Camera
from lightforge.errors import LightForgeError
from lightforge.lights import PointLight
from lightforge.materials import Material
from lightforge.patterns import CheckersPattern, RingPattern, StripePattern
from lightforge.renderer import Renderer, RenderSettings
from lightforge.shapes import Cone, Cube, Cylinder, Group, Plane, Sphere, glass_sphere
from lightforge.transformations import (
    rotation_x, rotation_y, scaling, translation, view_transform
)
from lightforge.tuples import Color, point, vector
from lightforge.world import World


def create_spheres_scene() -> World:
    """Create a room with three spheres on a checkered floor."""
    world = World()

    floor = Plane(material=Material(
        pattern=CheckersPattern(Color(0.9, 0.9, 0.9), Color(0.1, 0.1, 0.1)),
        specular=0.0,
        reflective=0.2
    ))
    world.add(floor)

    back_wall = Plane(
        transform=translation(0, 0, 5) @ rotation_x(math.pi / 2),
        material=Material(
            pattern=StripePattern(Color(1, 0.9, 0.9), Color(0.9, 0.7, 0.7), rotation_y(math.pi / 4)),
            specular=0.0
        )
    )
    world.add(back_wall)

    middle = Sphere(
        transform=translation(-0.5, 1, 0.5),
        material=Material(color=Color(0.1, 1, 0.5), diffuse=0.7, specular=0.3)
    )
    world.add(middle)

    right = Sphere(
        transform=translation(1.5, 0.5, -0.5) @ scaling(0.5, 0.5, 0.5),
        material=Material(
            pattern=RingPattern(Color(0.5, 1, 0.1), Color(0.2, 0.5, 0), scaling(0.2, 0.2, 0.2)),
            diffuse=0.7,
            specular=0.3
        )
    )
    world.add(right)

    left = Sphere(
        transform=translation(-1.5, 0.33, -0.75) @ scaling(0.33, 0.33, 0.33),
        material=Material(color=Color(1, 0.8, 0.1), diffuse=0.7, specular=0.3, reflective=0.3)
    )
    world.add(left)

    world.add_light(PointLight(point(-10, 10, -10), Color(1, 1, 1)))
    return world


def create_glass_scene() -> World:
    """Create a glass sphere with an air bubble, surrounded by solids."""
    world = World()

    world.add(Plane(material=Material(
        pattern=CheckersPattern(Color(0.35, 0.35, 0.35), Color(0.65, 0.65, 0.65)),
        specular=0.0,
        reflective=0.1
    )))

    glass = glass_sphere()
    glass.transform = translation(0, 1, 0)
    glass.material = Material(
        color=Color(0.05, 0.05, 0.1),
        diffuse=0.1,
        specular=1.0,
        shininess=300,
        reflective=0.9,
        transparency=0.9,
        refractive_index=1.5
    )
    world.add(glass)

    bubble = Sphere(
        transform=translation(0, 1, 0) @ scaling(0.5, 0.5, 0.5),
        material=Material(
            color=Color(0.05, 0.05, 0.05),
            diffuse=0.0,
            specular=1.0,
            shininess=300,
            reflective=0.9,
            transparency=0.9,
            refractive_index=1.0000034
        )
    )
    world.add(bubble)

    props = Group(transform=translation(0, 0, 3))
    props.add_child(Cube(
        transform=translation(-2.5, 0.5, 0) @ rotation_y(math.pi / 6) @ scaling(0.5, 0.5, 0.5),
        material=Material(color=Color(0.8, 0.2, 0.2))
    ))
    props.add_child(Cylinder(
        transform=translation(2.5, 0, 0) @ scaling(0.5, 1, 0.5),
        material=Material(color=Color(0.2, 0.3, 0.8)),
        minimum=0,
        maximum=1.5,
        closed=True
    ))
    props.add_child(Cone(
        transform=translation(0, 1, 1.5) @ scaling(0.5, 1, 0.5),
        material=Material(color=Color(0.9, 0.8, 0.2)),
        minimum=-1,
        maximum=0,
        closed=True
    ))
    world.add(props)

    world.add_light(PointLight(point(-10, 10, -10), Color(0.9, 0.9, 0.9)))
    return world


SCENES = {
    'spheres': (create_spheres_scene, point(0, 1.5, -5), point(0, 1, 0)),
    'glass': (create_glass_scene, point(0, 2.5, -5), point(0, 1, 0)),
}


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='LightForge - A Python Whitted-style Ray Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene spheres --output render.ppm
  python main.py --width 400 --height 200 --depth 5 --output glass.png --scene glass
        '''
    )

    parser.add_argument('--width', type=int, default=200, help='Image width (default: 200)')
    parser.add_argument('--height', type=int, default=100, help='Image height (default: 100)')
    parser.add_argument('--fov', type=float, default=60.0, help='Field of view in degrees (default: 60)')
    parser.add_argument('--depth', type=int, default=4, help='Max reflection/refraction depth (default: 4)')
    parser.add_argument('--threads', type=int, default=0, help='Number of threads (0=auto)')
    parser.add_argument('--output', type=str, default='output/render.ppm', help='Output filename')
    parser.add_argument('--scene', type=str, default='spheres', choices=sorted(SCENES),
                        help='Scene to render (default: spheres)')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    build, look_from, look_at = SCENES[args.scene]
    try:
        settings = RenderSettings(max_depth=args.depth, num_threads=args.threads)
        camera = Camera(
            args.width,
            args.height,
            math.radians(args.fov),
            view_transform(look_from, look_at, vector(0, 1, 0))
        )
    except LightForgeError as e:
        parser.error(str(e))

    # Print header
    print("=" * 60)
    print("LightForge Ray Tracer")
    print("=" * 60)

    print(f"\nRender Settings:")
    print(f"  Resolution: {args.width}x{args.height}")
    print(f"  Field of View: {args.fov} degrees")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Threads: {settings.num_threads}")

    print(f"\nCreating scene: {args.scene}")
    world = build()
    print(f"  Objects in scene: {len(world)}")

    renderer = Renderer(settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            sys.stdout.write(f'\r  [{bar}] {pct}%')
            sys.stdout.flush()

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()
    canvas = renderer.render(camera, world)
    elapsed = time.time() - start_time
    print(f"\n\nRender complete in {elapsed:.2f} seconds")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    canvas.save(output_path)
    print(f"Saved to: {output_path}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
