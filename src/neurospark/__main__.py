from neurospark.cli import main

main()
