from memocache.workout import main

main()
