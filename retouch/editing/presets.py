"""
Scene presets - ready-made main prompts for architectural renders.

Picking a preset replaces the main prompt with its text. Several presets
carry a "[Insert Building Type]" placeholder the user is expected to edit.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class PromptPreset:
    key: str
    label: str
    prompt: str


_PRESETS = [
    PromptPreset(
        "modern_minimalist",
        "Modern Minimalist",
        "A wide-angle architectural photograph of a luxurious modern minimalist building, viewed from the far end of its backyard under a bright clear blue sky. "
        "The two-story structure is characterized by clean white cubic forms, large floor-to-ceiling glass windows, and glass balcony railings. "
        "A long rectangular swimming pool with clear turquoise water runs parallel to the entire length of the building's main facade. "
        "A large, manicured green lawn area is situated to the left of the pool, and a wide paved walkway made of large light-colored stone tiles borders the pool on all other sides. "
        "Several wooden sun loungers with white cushions are arranged on the poolside patio on the right. "
        "A covered outdoor lounge area with furniture is integrated into the ground floor of the building. "
        "The landscaping features mature palm trees and various tropical plants, creating a serene and luxurious resort-like atmosphere. "
        "Bright midday sunlight casts sharp shadows.",
    ),
    PromptPreset(
        "backyard_landscape",
        "Backyard Landscape",
        "A wide-angle landscape photograph focusing on the luxurious backyard area of a modern property, not emphasizing the building itself. "
        "A long, rectangular swimming pool with clear turquoise water runs parallel to the main facade in the background. "
        "A wide paved walkway made of large light-colored stone tiles borders the entire length of the pool on the right side, featuring several white modern sun loungers. "
        "To the left of the pool is a perfectly manicured green lawn area. "
        "The landscape is adorned with mature palm trees and various lush tropical plants, creating a serene, high-end resort atmosphere. "
        "Bright midday natural sunlight casts sharp shadows, highlighting the textures of the stone and water under a clear blue sky. "
        "The style is contemporary and minimalist.",
    ),
    PromptPreset(
        "rice_paddy_villa",
        "Rice Paddy Villa",
        "A photorealistic architectural photograph of a [INSERT BUILDING TYPE HERE] situated on an elevated foundation above a flooded green rice paddy field. "
        "The water is calm, perfectly reflecting the structure and the clear blue sky with scattered fluffy white clouds. "
        "Lush, vibrant green rice plants fill the surrounding fields, with grassy banks and reeds. "
        "Bright, natural daylight illuminates the scene. "
        "The background shows a distant rural landscape with trees under a wide sky. "
        "High resolution, incredibly detailed textures, natural colors, peaceful atmosphere.",
    ),
    PromptPreset(
        "suburban_house",
        "Suburban House",
        "A wide-angle architectural photograph of a [Insert Building Type], [Insert Style], situated in an upscale luxury suburban neighborhood. "
        "The foreground features a spacious, clean paved asphalt driveway leading up to the structure. "
        "The building is surrounded by perfectly manicured landscape design, low trimmed hedges, ornamental shrubs, needle pine trees, and a lush green lawn. "
        "The sky is a clear, smooth gradient blue with soft natural daylight. "
        "Warm, welcoming yellow light glows from the windows, contrasting with the cool twilight sky. "
        "Ultra-realistic, 8k resolution, sharp focus, clean composition, premium real estate photography style.",
    ),
    PromptPreset(
        "european_estate",
        "European Estate",
        "A grand architectural photograph of a [Insert Building Type], situated in an opulent formal French garden estate. "
        "A long, elegant light-beige cobblestone paved driveway leads centrally towards the structure. "
        "The foreground is dominated by perfectly manicured geometric boxwood hedges, low-trimmed garden mazes, and symmetrical cone-shaped cypress trees flanking the path. "
        "Lush vibrant green lawns. "
        "The sky is a dramatic mix of blue and soft textured white clouds. "
        "Soft, diffused natural daylight. "
        "High-end real estate photography, hyper-realistic, 8k resolution, symmetry, wealth and elegance.",
    ),
    PromptPreset(
        "woodland_garden",
        "Woodland Garden",
        "A photorealistic architectural photograph of a [Insert Building Type], nestled in a lush, mature woodland garden. "
        "A winding light-grey flagstone pathway leads through a vibrant green lawn towards the entrance. "
        "The foreground is filled with rich, textured landscaping including ferns, hostas, and low-growing shrubs. "
        "Tall, mature trees frame the scene, creating a natural canopy overhead. "
        "Soft, diffused natural daylight illuminates the exterior, while warm golden interior lights glow invitingly from the windows, creating a cozy and serene atmosphere. "
        "High resolution, 8k, sharp focus, harmonious with nature",
    ),
    PromptPreset(
        "rice_field_aerial",
        "Rice Field Aerial",
        "A stunning architectural photograph of a [Insert Building Type], situated in the middle of vast, vibrant green rice paddy fields. "
        "In the background, a majestic, layering mountain range stretches across the horizon under a bright blue sky with fluffy white clouds. "
        "A long, straight paved concrete driveway leads from the foreground gate towards the building, flanked by manicured green lawns and the rice fields. "
        "The scene is bathed in bright, clear natural sunlight. "
        "High contrast, vivid colors, photorealistic, 8k resolution, wide-angle shot, peaceful countryside atmosphere.",
    ),
    PromptPreset(
        "lake_mountain_view",
        "Lake & Mountain View",
        "A realistic, detailed high-angle landscape photograph to serve as the setting for an architectural design. "
        "Bright, warm sunlight casts sharp shadows under a vibrant blue sky dotted with fluffy white clouds. "
        "Rugged mountainous terrain with snow-capped peaks and forested slopes surrounds a large, reflective deep blue lake. "
        "A meticulously landscaped hillside with green lawns, carefully placed shrubs and flowers, stone pathways, "
        "and a clear blue swimming pool with its surrounding sun deck. "
        "Where a building stood, replace it with a natural-looking garden.",
    ),
    PromptPreset(
        "resort_twilight",
        "Resort Twilight",
        "High-resolution photograph of a resort or residential project area in the dusk or dawn, blue-grey sky with wispy clouds. "
        "Meticulously designed and maintained gardens filled with lush greenery, large shade trees, pine trees, shrubs, colorful flowering plants, and ground covers. "
        "Concrete or stone walkways winding through the garden. "
        "Water features or swimming pools with clear water reflecting the sky. "
        "In the background, Modern architecture, single-detached houses, villas, or clubhouse, mixing materials like concrete, stone, wood, and glass. "
        "Large windows letting in natural light and warm lighting used in some areas. "
        "Asphalt or concrete roads within the project, clean and organized, with light from garden lights or building lights creating brightness and dimension.",
    ),
    PromptPreset(
        "mountain_village",
        "Mountain Village",
        "A vibrant mountain landscape teeming with lush, green forests and expansive meadows under a bright, cloud-dotted sky. "
        "Replace the single house with a diverse resort village arranged across the hillside: "
        "modern tropical buildings with thatch or flat roofs, large glass panels, stone, and wood, alongside thatched cottages. "
        "Add infinity pools, terraces, wooden walkways, and pavilions, with rich surrounding vegetation. "
        "Highly detailed, photorealistic.",
    ),
    PromptPreset(
        "lake_reflection",
        "Lake Reflection",
        "8K resolution landscape photograph showing a tranquil and fresh atmosphere of a waterfront area. "
        "Foreground is a large swamp or lake with perfectly still, mirror-like water reflecting the sky and surrounding landscape perfectly. "
        "The banks are spacious, neatly trimmed green lawns alternating with gravel paths and natural stones. "
        "Background is a lush rainforest and large high mountains covered in green trees. "
        "The sky has scattered clouds, providing soft lighting throughout the image. "
        'The center of the image reserves space for a "building" (which can be a wooden house, glass building, or modern building) '
        "to blend with nature and the reflection in the water.",
    ),
    PromptPreset(
        "forest_hill_reflection",
        "Forest Hill Reflection",
        "High-resolution landscape photograph emphasizing the tranquility and grandeur of nature. "
        "Foreground is fresh green lawn, well-maintained and trimmed, sloping down to the edge of a large lake. "
        "The water surface is perfectly still like a mirror, reflecting the surrounding scenery perfectly. "
        "Background is majestic high mountains covered with dense lush green rainforest. "
        "Some beautiful large trees stand at the water's edge to frame the image. "
        "Diffused light or soft morning sunlight makes the atmosphere look soft and fresh. "
        "The sky is slightly cloudy or has beautiful scattered clouds. "
        "At a suitable position by the lake, there is a building [Insert Building Type Here: Modern vacation home / Log cabin / Pavilion] "
        "situated harmoniously with the environment.",
    ),
    PromptPreset(
        "khao_yai_modern",
        "Khao Yai Modern",
        "A photorealistic architectural photograph of a two-story modern house with a distinctive design. "
        "The exterior walls blend exposed concrete and black structures with wooden slats to create a warm feeling harmonious with nature. "
        "Large clear glass panels from floor to ceiling reveal modern interior decoration. "
        "The house is situated amidst lush natural landscape. "
        "Background is a dense mountain range. "
        "In front, there is a reflecting pool, a smooth wide lawn, and a garden of various flowers. "
        "Morning natural sunlight hits, creating a quiet and luxurious atmosphere.",
    ),
    PromptPreset(
        "khao_yai_resort",
        "Khao Yai Resort",
        "A modern resort built of stone and wood, nestled in lush greenery, with a tranquil atmosphere. "
        "A wide lawn is bordered by white and purple flowering plants, and a pool reflects the building. "
        "Large trees, including mango trees with supports, provide shade. "
        "A forested mountain forms the backdrop, and afternoon sunlight bathes the scene in a relaxing ambiance. "
        "Exquisite landscaping, photorealistic.",
    ),
    PromptPreset(
        "pool_villa_twilight",
        "Pool Villa Twilight",
        "A cinematic, photorealistic architectural landscape photograph of a luxurious resort villa at twilight (Blue Hour). "
        "The foreground features a sleek, dark-tiled swimming pool with still water creating perfect, mirror-like reflections of the warm lights. "
        "A spacious wooden deck surrounds the pool. "
        "The outdoor living area includes built-in lounge seating with plush cushions, a dining area with a large parasol, and wide stone steps leading up to the residence. "
        "The scene is illuminated by a cozy, warm golden glow coming from numerous floor lanterns placed on the steps and pool edge, as well as the interior lighting. "
        "This warm light contrasts beautifully with the cool deep blue tones of the twilight sky. "
        "The mood is intimate, inviting, and expensive. "
        "Overlooking the pool deck is a wide, expansive luxury residence in any style (Modern Tropical, Contemporary Flat Roof, or Classic Resort with a pitched roof) "
        "with an open-concept design and massive sliding glass doors that are fully open, revealing a warm, illuminated interior. "
        "The backdrop is a dense, lush green hillside covering the horizon, providing a natural and secluded setting. "
        "8k resolution, architectural photography style.",
    ),
]

PROMPT_PRESETS: dict[str, PromptPreset] = {p.key: p for p in _PRESETS}


def preset_prompt(preset_key: str) -> str:
    """Prompt text for a preset. Raises KeyError for an unknown key."""
    return PROMPT_PRESETS[preset_key].prompt
