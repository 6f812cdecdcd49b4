# lets `pytest` run from a source checkout without an editable install
