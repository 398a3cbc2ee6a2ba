"""analyze_resume_cli.py
Run ResumeAnalysisFramework from the command line.
Example: `python analyze_resume_cli.py path/to/resume.pdf "Backend Engineer"`
"""
import sys

from resume_rag.models import ResumeAnalysis
from resume_rag.resume_analysis_framework import ResumeAnalysisFramework


def print_analysis(analysis: ResumeAnalysis) -> None:
    print("Resume Analysis Result:")
    print(f"\nSummary:\n{analysis.summary or 'Not available'}")
    print(f"\nStrengths:\n{analysis.strengths or 'Not available'}")
    print(f"\nWeaknesses:\n{analysis.weaknesses or 'Not available'}")
    print(f"\nSuggested Job Titles: {', '.join(analysis.job_titles) if analysis.job_titles else 'None'}")
    print(f"\nProfessional Summary:\n{analysis.professional_summary or 'Not available'}")

    if analysis.rating:
        rating = analysis.rating
        print(f"\nRating: {rating.total}/{rating.max_total} - {rating.grade}")
        for criterion, score in rating.sub_scores.items():
            print(f"  {criterion}: {score}")
        for improvement in rating.improvements:
            print(f"  - {improvement}")

    if analysis.features:
        print(f"\nSkills: {', '.join(analysis.features.skills) or 'None'}")
        print(f"Keywords: {', '.join(analysis.features.keywords) or 'None'}")

    if analysis.job_comparison:
        print(f"\nJob Comparison:\n{analysis.job_comparison}")


def main():
    if len(sys.argv) < 2:
        print("Usage: python analyze_resume_cli.py <file_path> [job_title]")
        sys.exit(1)

    file_path = sys.argv[1]
    job_title = sys.argv[2] if len(sys.argv) > 2 else None

    framework = ResumeAnalysisFramework()
    analysis = framework.analyze_resume(file_path, job_title=job_title)
    print_analysis(analysis)


if __name__ == "__main__":
    main()
