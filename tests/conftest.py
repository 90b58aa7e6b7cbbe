import pytest

from stammbaum import Person


@pytest.fixture
def family():
    """Three generations, a remarriage, a married-in spouse and a second tree
    joined to the first by the marriage of hans and paula."""
    return [
        Person("karl", spouse_ids=("anna",), sex="m"),
        Person("anna", sex="f"),
        Person("emil", parent_ids=("karl", "anna"), spouse_ids=("frieda", "martha"), sex="m"),
        Person("frieda", sex="f"),
        Person("martha", sex="f"),
        Person("otto", parent_ids=("karl", "anna"), sex="m"),
        Person("hans", parent_ids=("emil", "frieda"), sex="m"),
        Person("grete", parent_ids=("emil", "frieda"), sex="f"),
        Person("lotte", parent_ids=("emil", "martha"), sex="f"),
        Person("fritz", parent_ids=("otto",), sex="m"),
        Person("ida", spouse_ids=("fritz",), sex="f"),
        Person("max", parent_ids=("fritz", "ida"), sex="m"),
        Person("wilhelm", sex="m"),
        Person("paula", parent_ids=("wilhelm",), sex="f"),
        Person("kurt", parent_ids=("hans", "paula"), sex="m"),
    ]


@pytest.fixture
def family_csv(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text(
        "id;name;sex;parent1_id;parent2_id;spouse_id;birth_date;death_date;occupation\n"
        "1;Karl Görlitz;m;;;2;1850-03-01;1920-05-05;Bauer\n"
        "2;Anna Görlitz;f;;;1;1855-01-01;;\n"
        "3;Emil Görlitz;m;1;2;;1880-02-02;x1916-07-01;\n"
        "4;Paul Görlitz;m;*1;2;-;#um 1885;;\n",
        encoding="utf-8",
    )
    return path
