LAYOUT_VERSION = 2
MIN_COLUMNS = 1
MAX_COLUMNS = 3

ALLOWED_IMAGE_SIZES = (25, 50, 75, 100)
ALLOWED_IMAGE_ALIGNS = ("left", "center", "right")
ALLOWED_BUTTON_VARIANTS = ("primary", "secondary", "ghost")
ALLOWED_HERO_MEDIA_MODES = ("single_image", "cards_only", "four_cards")
HERO_IMAGE_HEIGHT_PRESETS = ("sm", "md", "lg", "xl")
HERO_IMAGE_HEIGHT_PX = (120, 2000)

# Blocks that always span every column of their section
FULL_WIDTH_BLOCK_TYPES = frozenset({"hero", "recent-posts", "services"})

SERVICE_DESCRIPTION_MAX = 160

# -------------------------------------------------
# Content defaults (site copy is Brazilian Portuguese)
# -------------------------------------------------
RECENT_POSTS_DEFAULTS = {
    "title": "Conteúdos recentes",
    "subtitle": "Leituras curtas para acompanhar você entre as sessões.",
    "ctaLabel": "Ver todos os artigos",
    "ctaHref": "/blog",
    "postsLimit": 3,
}

FORM_DEFAULTS = {
    "submitLabel": "Enviar",
    "successMessage": "Formulário enviado com sucesso!",
}

WHATSAPP_LABEL = "Enviar mensagem"

CONTACT_INFO_DEFAULTS = {
    "titleHtml": "<h2>Contato</h2>",
    "whatsappLabel": WHATSAPP_LABEL,
    "socialLinksTitle": "Redes Sociais",
}

SERVICES_DEFAULTS = {
    "sectionTitle": "Serviços",
    "buttonLabel": "Saiba mais",
}

CTA_DEFAULTS = {
    "title": "Vamos conversar?",
    "text": "Agende uma conversa inicial para entender o melhor plano.",
    "ctaLabel": "Agendar",
    "ctaHref": "/contato",
}

HERO_QUOTE = (
    "Cada sessão é um espaço seguro para você compreender suas emoções, "
    "criar novas rotas e caminhar com leveza."
)
HERO_QUOTE_AUTHOR = "Cristiane Jageneski"

HERO_V1_DEFAULTS = {
    "heading": "Psicologia para vidas com mais sentido",
    "subheading": (
        "Caminhadas terapêuticas com escuta junguiana, argilaria e expressão "
        "criativa, para acolher sua história."
    ),
    "ctaLabel": "Agendar sessão",
    "ctaHref": "/contato",
    "secondaryCta": "Conhecer a abordagem",
    "secondaryHref": "/sobre",
    "badges": ["Junguiana", "Argilaria", "Expressão criativa"],
}

HERO_SMALL_CARDS = (
    {"title": "Equilíbrio emocional", "text": "Ferramentas práticas para o dia a dia."},
    {"title": "Relações saudáveis", "text": "Comunicação e limites claros."},
    {"title": "Autoconhecimento", "text": "Reconectar-se com quem você é."},
)

HERO_PLACEHOLDER_IMAGE = "https://via.placeholder.com/600x400?text=Adicione+uma+imagem"
