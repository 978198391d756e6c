"""
Skill taxonomy used to detect skills in CV and job offer text.

Each canonical skill maps to the aliases that count as a mention of it.
Aliases are matched case-insensitively on keyword boundaries, so they must be
written in lower case.
"""

# =============================================================================
# Technical
# =============================================================================

TECHNICAL_SKILLS: dict[str, list[str]] = {
    "JavaScript": ["javascript", "js", "ecmascript"],
    "TypeScript": ["typescript", "ts"],
    "Python": ["python"],
    "Java": ["java"],
    "PHP": ["php"],
    "C++": ["c++", "cpp"],
    "C#": ["c#", "csharp", ".net", "dotnet"],
    "Go": ["golang", "go language"],
    "Rust": ["rust"],
    "Ruby": ["ruby"],
    "Kotlin": ["kotlin"],
    "Swift": ["swift"],
    "HTML": ["html", "html5"],
    "CSS": ["css", "css3", "sass", "scss"],
    "Bootstrap": ["bootstrap"],
    "React": ["react", "react.js", "reactjs"],
    "React Native": ["react native"],
    "Angular": ["angular"],
    "Vue.js": ["vue", "vue.js", "vuejs"],
    "Next.js": ["next.js", "nextjs"],
    "Node.js": ["node", "node.js", "nodejs"],
    "Express": ["express", "express.js"],
    "Django": ["django"],
    "Flask": ["flask"],
    "FastAPI": ["fastapi"],
    "Laravel": ["laravel"],
    "Spring": ["spring", "spring boot"],
    "Hibernate": ["hibernate"],
    "Flutter": ["flutter"],
    "Android": ["android"],
    "iOS": ["ios"],
    "REST": ["rest", "restful", "api rest", "rest api"],
    "GraphQL": ["graphql"],
    "UML": ["uml"],
    "Merise": ["merise"],
}

DATA_SKILLS: dict[str, list[str]] = {
    "SQL": ["sql"],
    "MySQL": ["mysql"],
    "PostgreSQL": ["postgresql", "postgres"],
    "Oracle": ["oracle"],
    "MongoDB": ["mongodb", "mongo"],
    "Redis": ["redis"],
    "Machine Learning": ["machine learning", "apprentissage automatique"],
    "Data Analysis": ["data analysis", "analyse de données", "pandas"],
}

CLOUD_DEVOPS_SKILLS: dict[str, list[str]] = {
    "Git": ["git", "github", "gitlab"],
    "Docker": ["docker"],
    "Kubernetes": ["kubernetes", "k8s"],
    "AWS": ["aws", "amazon web services"],
    "Azure": ["azure"],
    "GCP": ["gcp", "google cloud"],
    "Linux": ["linux", "unix"],
    "Windows": ["windows"],
    "CI/CD": ["ci/cd", "continuous integration", "jenkins", "github actions"],
    "DevOps": ["devops"],
}

METHOD_SKILLS: dict[str, list[str]] = {
    "Agile": ["agile", "agilité"],
    "Scrum": ["scrum"],
    "Testing": ["unit testing", "tests unitaires", "tdd", "pytest", "jest", "junit"],
}

# =============================================================================
# Domain specific
# =============================================================================

FINANCE_SKILLS: dict[str, list[str]] = {
    "Finance": ["finance", "financier", "financière", "financial"],
    "Banking": ["banque", "bancaire", "banking", "bank"],
    "Accounting": ["comptabilité", "comptable", "accounting", "ifrs"],
    "Audit": ["audit", "auditing"],
    "Credit": ["crédit", "credit"],
    "Investment": ["investissement", "investment", "portefeuille", "portfolio"],
    "Risk Management": ["risque", "risk management", "gestion des risques"],
    "Compliance": ["compliance", "conformité", "réglementation", "bâle"],
    "Insurance": ["assurance", "insurance"],
    "Wealth Management": ["patrimoine", "wealth management", "épargne"],
}

DESIGN_SKILLS: dict[str, list[str]] = {
    "Photoshop": ["photoshop"],
    "Illustrator": ["illustrator"],
    "InDesign": ["indesign"],
    "Figma": ["figma"],
    "Sketch": ["sketch"],
    "Adobe XD": ["adobe xd"],
    "After Effects": ["after effects"],
    "Premiere Pro": ["premiere pro"],
    "UI Design": ["ui", "interface utilisateur", "user interface"],
    "UX Design": ["ux", "user experience", "expérience utilisateur"],
    "Graphic Design": ["graphic design", "design graphique", "graphisme"],
    "Typography": ["typographie", "typography"],
    "Branding": ["identité visuelle", "branding", "logo"],
}

BUSINESS_SKILLS: dict[str, list[str]] = {
    "Sales": ["vente", "sales", "commercial"],
    "Marketing": ["marketing"],
    "Communication": ["communication"],
    "Negotiation": ["négociation", "negotiation"],
    "Management": ["management", "gestion d'équipe", "team lead"],
    "Project Management": ["gestion de projet", "project management"],
    "Strategy": ["stratégie", "strategy"],
    "Human Resources": ["rh", "ressources humaines", "human resources"],
    "Legal": ["juridique", "droit", "legal"],
    "Consulting": ["conseil", "consulting"],
}

SKILL_CATEGORIES: dict[str, dict[str, list[str]]] = {
    "technical": TECHNICAL_SKILLS,
    "data": DATA_SKILLS,
    "cloud_devops": CLOUD_DEVOPS_SKILLS,
    "methods": METHOD_SKILLS,
    "finance": FINANCE_SKILLS,
    "design": DESIGN_SKILLS,
    "business": BUSINESS_SKILLS,
}


def build_skill_index() -> dict[str, tuple[str, ...]]:
    """Flatten all categories into one canonical-name -> aliases mapping."""
    index: dict[str, tuple[str, ...]] = {}
    for skills in SKILL_CATEGORIES.values():
        for name, aliases in skills.items():
            index[name] = tuple(aliases)
    return index


SKILL_INDEX = build_skill_index()

# Keywords hinting at professional experience / higher education in a CV
EXPERIENCE_KEYWORDS = [
    "years", "year of experience", "experience", "internship", "intern", "project",
    "ans", "année", "expérience", "stage", "projet",
]

EDUCATION_KEYWORDS = [
    "degree", "university", "school", "bachelor", "master", "phd", "engineering school",
    "diplôme", "université", "école", "formation", "licence", "ingénieur",
]
