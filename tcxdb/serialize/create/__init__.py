from tcxdb.serialize.create.json import export_json, to_json
