from auditcheck.cli import main

main(prog_name="auditcheck")
