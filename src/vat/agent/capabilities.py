"""Catalogue of example phrases the assistant understands."""

CAPABILITIES: tuple[str, ...] = (
    "Open a model.",
    "Clean my model.",
    "Select first entity.",
    "Select first group.",
    "Select groups with name Wall.",
    "Select first component.",
    "Select components with name Door.",
    "Move selection 1m along X axis, 1m along Y axis and 1m along Z axis.",
    "Rotate selection by 90 degrees.",
    "Increase selection size 2 times.",
    "Rename selection with name Table.",
    "Duplicate selection with name Chair.",
    "Clear selection.",
    "Erase selection.",
    "Activate the paint bucket tool.",
    "Draw me a cube with a width of 1m, depth of 1m and height of 1m.",
    "Draw me a cone with a radius of 1m and height of 1m.",
    "Draw me a cylinder with a radius of 1m and height of 1m.",
    "Draw me a prism with a radius of 1m, height of 1m and 6 sides.",
    "Draw me a pyramid with a radius of 1m, height of 1m and 4 sides.",
    "Draw me a sphere with a radius of 1m.",
    "Write Hello world.",
    "Search for an extension about ...",
    "Let's talk about you.",
    "What are we talking about?",
    "What time is it?",
    "Ball is a toy.",
    "What do you know about ball?",
    "Box has 4 wheels.",
    "How many wheels does box have?",
)
