"""Sample catalogue used to bootstrap a fresh database."""

import json

import structlog
from protean.utils.globals import current_domain

from storefront.catalogue.management import AddProduct
from storefront.catalogue.product import Product

logger = structlog.get_logger(__name__)

_IMAGE = "https://images.unsplash.com/photo-1610701596007-11502861dcfa?w=800"

SAMPLE_PRODUCTS = [
    {
        "name_en": "Rustic Terracotta Bowl",
        "name_fr": "Bol en Terre Cuite Rustique",
        "description_en": (
            "A handcrafted terracotta bowl with organic texture and warm earth tones. "
            "Perfect for serving salads or displaying fruit."
        ),
        "description_fr": (
            "Un bol en terre cuite fait main avec une texture organique et des tons chauds de terre. "
            "Parfait pour servir des salades ou présenter des fruits."
        ),
        "price": "45.00",
        "category": "bowls",
        "in_stock": True,
        "featured": True,
        "dimensions": "20cm diameter x 8cm height",
        "materials": "Terracotta clay, natural glaze",
        "care_instructions": "Hand wash recommended, microwave safe",
    },
    {
        "name_en": "Sage Green Vase",
        "name_fr": "Vase Vert Sauge",
        "description_en": (
            "An elegant vase in calming sage green tones, hand-thrown and finished with a smooth matte glaze."
        ),
        "description_fr": (
            "Un vase élégant aux tons vert sauge apaisants, tourné à la main et fini avec un glaçage mat lisse."
        ),
        "price": "68.00",
        "category": "vases",
        "in_stock": True,
        "featured": True,
        "dimensions": "15cm diameter x 25cm height",
        "materials": "Stoneware clay, matte glaze",
        "care_instructions": "Wipe clean with damp cloth",
    },
    {
        "name_en": "Morning Coffee Mug",
        "name_fr": "Tasse à Café du Matin",
        "description_en": (
            "Start your day with this perfectly sized coffee mug, featuring a comfortable handle and warm glaze."
        ),
        "description_fr": (
            "Commencez votre journée avec cette tasse à café de taille parfaite, "
            "dotée d'une anse confortable et d'un glaçage chaleureux."
        ),
        "price": "32.00",
        "category": "mugs",
        "in_stock": True,
        "featured": False,
        "dimensions": "9cm diameter x 10cm height",
        "materials": "Stoneware clay",
        "care_instructions": "Dishwasher and microwave safe",
    },
    {
        "name_en": "Artisan Dinner Plate",
        "name_fr": "Assiette de Dîner Artisanale",
        "description_en": "A beautifully crafted dinner plate with subtle variations that make each piece unique.",
        "description_fr": (
            "Une assiette de dîner magnifiquement conçue avec des variations subtiles "
            "qui rendent chaque pièce unique."
        ),
        "price": "52.00",
        "category": "plates",
        "in_stock": True,
        "featured": False,
        "dimensions": "27cm diameter",
        "materials": "Porcelain, food-safe glaze",
        "care_instructions": "Dishwasher safe",
    },
    {
        "name_en": "Minimalist Serving Bowl",
        "name_fr": "Bol de Service Minimaliste",
        "description_en": "A clean, modern serving bowl with smooth lines and a pristine white finish.",
        "description_fr": "Un bol de service épuré et moderne avec des lignes lisses et une finition blanche immaculée.",
        "price": "58.00",
        "category": "bowls",
        "in_stock": True,
        "featured": False,
        "dimensions": "25cm diameter x 10cm height",
        "materials": "Porcelain",
        "care_instructions": "Dishwasher and microwave safe",
    },
    {
        "name_en": "Textured Ceramic Vase",
        "name_fr": "Vase en Céramique Texturé",
        "description_en": "A statement vase featuring intricate hand-carved textures and a natural finish.",
        "description_fr": (
            "Un vase remarquable présentant des textures complexes sculptées à la main et une finition naturelle."
        ),
        "price": "85.00",
        "category": "vases",
        "in_stock": False,
        "featured": False,
        "dimensions": "18cm diameter x 30cm height",
        "materials": "Stoneware clay, natural texture",
        "care_instructions": "Wipe with soft cloth",
    },
]


def seed_catalogue(force: bool = False) -> int:
    """Insert the sample products. Returns the number inserted.

    Skips when the catalogue already has products unless ``force`` is set.
    Must run inside the storefront domain context.
    """
    repo = current_domain.repository_for(Product)
    if repo.listing() and not force:
        logger.info("Catalogue already populated, skipping seed")
        return 0

    for sample in SAMPLE_PRODUCTS:
        command = AddProduct(
            **sample,
            image_url=_IMAGE,
            image_urls=json.dumps([_IMAGE]),
        )
        current_domain.process(command, asynchronous=False)

    logger.info("Seeded catalogue", count=len(SAMPLE_PRODUCTS))
    return len(SAMPLE_PRODUCTS)
