"""Catalog content loaded into a fresh store at process start."""

from typing import List

from schemas import ArticleCreate, FAQCreate, ProductCreate, TestimonialCreate

PRODUCTS: List[ProductCreate] = [
    ProductCreate(
        name="Formula Sonno Trim",
        slug="formula-sonno-trim",
        description=(
            "Il nostro integratore del sonno con melatonina, valeriana e L-teanina ti aiuta ad "
            "addormentarti più velocemente e a dormire più a lungo. Svegliati riposato senza "
            "l'intontimento dei farmaci da prescrizione."
        ),
        short_description=(
            "Il nostro integratore del sonno formulato scientificamente ti aiuta ad addormentarti "
            "più velocemente e a svegliarti riposato."
        ),
        price=3999,
        category="supplements",
        image_url="https://images.unsplash.com/photo-1574482620811-1aa16ffe3c76?auto=format&fit=crop&w=800&q=80",
        ingredients=(
            "Melatonina (3mg), Estratto di Valeriana (200mg), L-Teanina (100mg), Magnesio (120mg), "
            "GABA (100mg), Estratto di Melissa (80mg), Estratto di Passiflora (50mg)"
        ),
        benefits=[
            "Ingredienti clinicamente testati",
            "Formula non assuefacente",
            "Addormentati il 55% più velocemente",
            "Abbonati e risparmia il 20%",
        ],
        featured=True,
        best_seller=True,
        in_stock=True,
        quantity=30,
    ),
    ProductCreate(
        name="Sonno Profondo Trim",
        slug="sonno-profondo-trim",
        description=(
            "La nostra formula extra-forte è progettata per chi soffre di problemi persistenti del "
            "sonno. Una combinazione di ingredienti naturali che favorisce un sonno profondo e "
            "ristoratore anche nei casi più difficili di insonnia."
        ),
        short_description="Formula extra-forte per chi soffre di problemi persistenti del sonno.",
        price=4999,
        category="supplements",
        image_url="https://images.unsplash.com/photo-1607344645866-009c320b63e0?auto=format&fit=crop&w=800&q=80",
        ingredients=(
            "Melatonina (5mg), Estratto di Valeriana (300mg), L-Teanina (200mg), Magnesio (150mg), "
            "GABA (200mg), 5-HTP (50mg), Estratto di Melissa (100mg), Estratto di Passiflora (100mg), "
            "Ashwagandha (100mg)"
        ),
        benefits=[
            "Formula extra-forte per casi difficili",
            "Favorisce cicli di sonno più profondi",
            "Tecnologia a rilascio prolungato",
            "Soluzione per il sonno senza farmaci",
        ],
        quantity=30,
    ),
    ProductCreate(
        name="Bundle Sonno + Relax",
        slug="bundle-sonno-relax",
        description=(
            "La formula completa giorno e notte affronta sia i problemi di sonno che lo stress "
            "diurno. La formula Sonno ti aiuta ad addormentarti naturalmente, mentre la formula "
            "Relax gestisce lo stress quotidiano."
        ),
        short_description="Formula giorno e notte per gestire lo stress e migliorare la qualità del sonno.",
        price=7499,
        sale_price=5999,
        category="bundles",
        image_url="https://images.unsplash.com/photo-1576967402682-19976eb930f2?auto=format&fit=crop&w=800&q=80",
        ingredients=(
            "Formula Sonno: Melatonina, Valeriana, L-Teanina, Magnesio. "
            "Formula Relax: Ashwagandha, L-Teanina, Rhodiola Rosea, Melissa, Magnesio."
        ),
        benefits=[
            "Gestione sonno-stress 24 ore",
            "Risparmia il 25% rispetto all'acquisto separato",
            "Formule complementari che lavorano insieme",
            "Migliora sia la qualità del sonno che la resistenza allo stress",
        ],
        quantity=60,
    ),
]

ARTICLES: List[ArticleCreate] = [
    ArticleCreate(
        title="Comprendere l'Insonnia: Cause e Soluzioni",
        slug="comprendere-insonnia-cause-soluzioni",
        content=(
            "<p>L'insonnia è un disturbo del sonno comune che colpisce milioni di italiani.</p>"
            "<h2>Cause Comuni dell'Insonnia</h2>"
            "<ul><li><strong>Stress e Ansia</strong></li><li><strong>Cattive Abitudini di Sonno</strong></li>"
            "<li><strong>Condizioni Mediche</strong></li><li><strong>Farmaci</strong></li>"
            "<li><strong>Disturbi del Ritmo Circadiano</strong></li></ul>"
            "<h2>Soluzioni Basate sull'Evidenza</h2>"
            "<p>La terapia cognitivo comportamentale per l'insonnia (CBT-I) affronta le cause "
            "sottostanti piuttosto che limitarsi a trattare i sintomi.</p>"
        ),
        summary=(
            "Scopri il disturbo del sonno più comune che colpisce milioni di italiani e gli approcci "
            "basati sull'evidenza per il trattamento."
        ),
        category="sleep_disorders",
        author="Dott.ssa Emilia Rossi",
        author_title="Specialista del Sonno, MD, PhD",
        image_url="https://images.unsplash.com/photo-1541781774459-bb2af2f05b55?auto=format&fit=crop&w=800&q=80",
        read_time=8,
        featured=True,
    ),
    ArticleCreate(
        title="10 Consigli di Igiene del Sonno per un Riposo Migliore",
        slug="consigli-igiene-sonno-riposo-migliore",
        content=(
            "<p>Una buona igiene del sonno è la base di un riposo di qualità.</p>"
            "<ol><li>Mantieni un orario regolare</li><li>Crea una routine rilassante</li>"
            "<li>Limita gli schermi prima di dormire</li><li>Evita la caffeina nel pomeriggio</li>"
            "<li>Tieni la camera fresca e buia</li></ol>"
        ),
        summary=(
            "Cambiamenti semplici ma efficaci nella tua routine quotidiana e nell'ambiente della camera "
            "da letto che possono migliorare drasticamente la qualità del tuo sonno."
        ),
        category="sleep_tips",
        author="Sara Bianchi",
        author_title="Coach del Sonno",
        image_url="https://images.unsplash.com/photo-1520206183501-b80df61043c2?auto=format&fit=crop&w=800&q=80",
        read_time=6,
        featured=True,
    ),
    ArticleCreate(
        title="La Scienza Dietro gli Integratori per il Sonno",
        slug="scienza-dietro-integratori-sonno",
        content=(
            "<p>Melatonina, valeriana, L-teanina e magnesio sono tra gli aiuti naturali più studiati.</p>"
            "<h2>Come scegliere</h2>"
            "<p>La scelta dipende dal tipo di problema: difficoltà ad addormentarsi, risvegli notturni "
            "o stress.</p>"
        ),
        summary=(
            "Una guida completa agli aiuti naturali per il sonno, la loro efficacia e come scegliere "
            "l'integratore giusto per le tue esigenze."
        ),
        category="supplements",
        author="Dott. Michele Ricci",
        author_title="Farmacologo, PhD",
        image_url="https://images.unsplash.com/photo-1505576633757-0ac1084f63cd?auto=format&fit=crop&w=800&q=80",
        read_time=10,
        featured=True,
    ),
]

TESTIMONIALS: List[TestimonialCreate] = [
    TestimonialCreate(
        customer_name="Sara C.",
        rating=5,
        review=(
            "Ho lottato con l'insonnia per anni. Dopo solo una settimana di utilizzo della Formula "
            "Sonno Trim, mi addormento più velocemente e rimango addormentata tutta la notte."
        ),
        image_url="https://randomuser.me/api/portraits/women/45.jpg",
        featured=True,
    ),
    TestimonialCreate(
        customer_name="Michele T.",
        rating=5,
        review=(
            "Come lavoratore notturno, un sonno di qualità era impossibile da ottenere. Sonno "
            "Profondo Trim ha cambiato la mia vita."
        ),
        image_url="https://randomuser.me/api/portraits/men/32.jpg",
        featured=True,
    ),
    TestimonialCreate(
        customer_name="Ginevra R.",
        rating=4.5,
        review=(
            "All'inizio ero scettica, ma dopo aver provato il Bundle Sonno + Relax la qualità del "
            "mio sonno è migliorata notevolmente."
        ),
        image_url="https://randomuser.me/api/portraits/women/68.jpg",
        featured=True,
    ),
]

FAQS: List[FAQCreate] = [
    FAQCreate(
        question="Gli integratori Trim Sleep creano dipendenza?",
        answer=(
            "No, i nostri integratori sono formulati con ingredienti naturali che lavorano con i "
            "meccanismi naturali del sonno senza causare dipendenza."
        ),
        category="products",
        order=1,
    ),
    FAQCreate(
        question="Quanto presto noterò i risultati?",
        answer=(
            "La maggior parte dei clienti riporta miglioramenti entro 3-5 giorni di uso costante; i "
            "risultati ottimali arrivano dopo 2-3 settimane."
        ),
        category="products",
        order=2,
    ),
    FAQCreate(
        question="Posso prendere gli integratori Trim Sleep con altri farmaci?",
        answer=(
            "Raccomandiamo di consultare il tuo medico prima di combinarli con farmaci da "
            "prescrizione."
        ),
        category="products",
        order=3,
    ),
    FAQCreate(
        question="Cosa succede se gli integratori non funzionano per me?",
        answer=(
            "Offriamo una garanzia di soddisfazione di 60 giorni: contatta l'assistenza clienti per "
            "un rimborso completo."
        ),
        category="products",
        order=4,
    ),
    FAQCreate(
        question="In che modo gli integratori Trim Sleep sono diversi dai sonniferi da banco?",
        answer=(
            "Molti sonniferi da banco si basano su antistaminici che causano sonnolenza mattutina; "
            "i prodotti Trim Sleep usano una miscela di ingredienti naturali senza questi effetti."
        ),
        category="products",
        order=5,
    ),
]
