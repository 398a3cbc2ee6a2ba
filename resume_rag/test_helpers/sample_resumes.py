"""sample_resumes.py
Resume texts shared by the test suites.
"""

SAMPLE_RESUME_TEXT = """Jane Smith
Senior Software Engineer | jane.smith@example.com | Austin, TX

PROFESSIONAL SUMMARY
Senior software engineer with 7 years of experience building Python and JavaScript web services. Led a team of four engineers delivering cloud-native products on AWS.

WORK EXPERIENCE
Senior Software Engineer, Acme Cloud (2020 - present)
Designed a Python microservice platform on Docker and Kubernetes that cut deployment time by 40%. Mentored junior developers and introduced code review guidelines. Migrated the reporting database from MySQL to PostgreSQL with zero downtime.

Software Developer, Globex (2017 - 2020)
Built React dashboards for the analytics team. Automated Jenkins pipelines and reduced failed releases by 25%.

EDUCATION
Bachelor of Science in Computer Science, University of Texas at Austin

CERTIFICATIONS
AWS Certified Developer - Associate
"""

# Short texts used to check retrieval ranking
RANKING_CHUNKS = [
    "Python developer with AWS experience",
    "Java backend engineer",
    "Frontend React specialist",
]


def build_sentence_text(total_length: int = 2000) -> str:
    """
    Text of exactly `total_length` characters made of short, distinct sentences.
    """
    sentences = []
    length = 0
    i = 0
    while length < total_length:
        sentence = f"Project {i:03d} shipped a reliable service for the data team. "
        sentences.append(sentence)
        length += len(sentence)
        i += 1
    return "".join(sentences)[:total_length]
