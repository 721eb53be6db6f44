"""Generate a synthetic class roster for demos and manual testing."""

import pandas as pd
import random
import os

FIRST_NAMES = {
    "male": ["Liam", "Noah", "Oliver", "Elijah", "James", "Lucas", "Mason", "Ethan", "Leo", "Jack"],
    "female": ["Olivia", "Emma", "Amelia", "Sophia", "Mia", "Isla", "Ava", "Chloe", "Lily", "Grace"],
}
LAST_NAMES = ["Chen", "Smith", "Garcia", "Wang", "Brown", "Li", "Jones", "Zhang", "Miller", "Liu"]


def generate_roster_df(count: int = 30, seed: int = 42) -> pd.DataFrame:
    """Roster with name, id, gender and height columns; no seats assigned."""
    rng = random.Random(seed)
    rows = []
    used = set()
    for i in range(1, count + 1):
        gender = rng.choice(["male", "female"])
        name = f"{rng.choice(FIRST_NAMES[gender])} {rng.choice(LAST_NAMES)}"
        while name in used:
            name = f"{rng.choice(FIRST_NAMES[gender])} {rng.choice(LAST_NAMES)}"
        used.add(name)
        rows.append({
            "Name": name,
            "Student ID": f"S{i:03d}",
            "Gender": gender,
            "Height": rng.randint(140, 185) if gender == "male" else rng.randint(138, 175),
            "Notes": rng.choice(["", "", "", "needs front row", "glasses"]),
        })
    return pd.DataFrame(rows)


def generate_sample_csv(output_dir: str):
    """Write the sample roster CSV to the given directory."""
    os.makedirs(output_dir, exist_ok=True)
    generate_roster_df().to_csv(os.path.join(output_dir, "roster.csv"), index=False)


def generate_sample_excel(output_dir: str):
    """Write the sample roster as an Excel workbook."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, "roster.xlsx")
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        generate_roster_df().to_excel(writer, sheet_name="Roster", index=False)


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_csv(out)
    generate_sample_excel(out)
    print("Sample roster CSV and Excel files generated in sample_files/")
